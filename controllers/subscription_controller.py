from typing import Dict, List

from controllers.crud_controller import CrudController
from core.validation import SubscriptionInput, validate_subscription
from models.subscription import Subscription
from services import subscription_service


class SubscriptionController(CrudController[Subscription]):
    """Subscriptions page logic. No search, the list is always complete."""
    entity_label = "subscriptions"
    form_fields = ["name", "description", "duration_days", "price"]
    delete_prompt = "Are you sure you want to delete this subscription plan?"

    def _fetch(self) -> List[Subscription]:
        return subscription_service.get_subscriptions()

    def _form_from_record(self, record: Subscription) -> Dict[str, str]:
        return {
            "name": record.name,
            "description": record.description,
            "duration_days": str(record.duration_days),
            # 25.0 -> "25", 19.99 -> "19.99"
            "price": str(int(record.price)) if record.price.is_integer() else str(record.price),
        }

    def _validate(self, form: Dict[str, str]) -> SubscriptionInput:
        return validate_subscription(
            form.get("name"), form.get("description"), form.get("duration_days"), form.get("price")
        )

    def _insert(self, payload: SubscriptionInput) -> int:
        return subscription_service.add_subscription(payload)

    def _update(self, record_id: int, payload: SubscriptionInput) -> bool:
        return subscription_service.update_subscription(record_id, payload)

    def _delete(self, record_id: int) -> bool:
        return subscription_service.delete_subscription(record_id)
