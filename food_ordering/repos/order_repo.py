# food_ordering/repos/order_repo.py
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from food_ordering.data.models.order import OrderModel
from food_ordering.data.models.order_item import OrderItemModel
from food_ordering.data.models.order_tracking import OrderTrackingModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def add_tracking_event(self, order_id: int, status: str) -> OrderTrackingModel:
        event = OrderTrackingModel(order_id=order_id, status=status)
        self.db.add(event)
        self.db.flush()
        return event

    def get_order_for_user(self, order_id: int, user_id: int) -> OrderModel | None:
        #populate_existing - status mogl zmienic warunkowy UPDATE obok sesji
        return self.db.execute(
            select(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.user_id == user_id,
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def list_orders_with_counts(self, user_id: int) -> list[tuple[OrderModel, int]]:
        counts = (
            select(OrderItemModel.order_id, func.count(OrderItemModel.id).label("item_count"))
            .group_by(OrderItemModel.order_id)
            .subquery()
        )
        rows = self.db.execute(
            select(OrderModel, func.coalesce(counts.c.item_count, 0))
            .outerjoin(counts, counts.c.order_id == OrderModel.id)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        ).all()
        return [(order, int(count)) for order, count in rows]

    def get_order_items(self, order_id: int) -> list[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.id)
            ).scalars()
        )

    def get_tracking(self, order_id: int) -> list[OrderTrackingModel]:
        return list(
            self.db.execute(
                select(OrderTrackingModel)
                .where(OrderTrackingModel.order_id == order_id)
                .order_by(OrderTrackingModel.timestamp.asc(), OrderTrackingModel.id.asc())
            ).scalars()
        )

    def transition_status(self, order_id: int, user_id: int, from_status: str, to_status: str) -> int:
        #update ... where status = from_status, rowcount 0 -> ktos byl pierwszy
        result = self.db.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.user_id == user_id,
                OrderModel.status == from_status,
            )
            .values(status=to_status)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
