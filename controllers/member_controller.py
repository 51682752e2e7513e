from typing import Dict, List

from controllers.crud_controller import CrudController
from core.validation import MemberInput, ValidationError, validate_member
from models.member import Member
from services import member_service
from services.member_service import DUPLICATE_EMAIL_MESSAGE


class MemberController(CrudController[Member]):
    """
    Members page logic, with a search box filtering on name or email.
    """
    entity_label = "members"
    form_fields = ["name", "email", "phone"]
    delete_prompt = (
        "Are you sure you want to delete this member? "
        "Associated attendance and payments may also be removed."
    )

    def __init__(self):
        super().__init__()
        self.search_term = ""

    def search(self, term: str) -> bool:
        """
        Re-queries the list filtered by the term. A blank term lists everyone.
        The term sticks, so lists re-read after a save or delete stay filtered.
        """
        if self.is_fatal:
            return False
        self.search_term = (term or "").strip()
        return self.refresh()

    def _fetch(self) -> List[Member]:
        return member_service.get_members(self.search_term)

    def _form_from_record(self, record: Member) -> Dict[str, str]:
        return {"name": record.name, "email": record.email, "phone": record.phone or ""}

    def _validate(self, form: Dict[str, str]) -> MemberInput:
        data = validate_member(form.get("name"), form.get("email"), form.get("phone"))
        if member_service.email_exists(data.email, exclude_id=self.editing_id):
            raise ValidationError(DUPLICATE_EMAIL_MESSAGE)
        return data

    def _insert(self, payload: MemberInput) -> int:
        return member_service.add_member(payload)

    def _update(self, record_id: int, payload: MemberInput) -> bool:
        return member_service.update_member(record_id, payload)

    def _delete(self, record_id: int) -> bool:
        return member_service.delete_member(record_id)
