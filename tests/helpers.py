"""
Form builders shared by the test modules.
"""

from typing import Optional, Sequence

from formquota.api.forms import form_from_payload
from formquota.models.api.form import FormCreate
from formquota.models.domain.form import Form


def form_payload(*questions: Sequence[Optional[int]], title: str = "Workshop signup") -> FormCreate:
    """
    Payload with one question per argument; each argument lists the
    option limits of that question (None for unlimited).
    """
    return FormCreate(
        title=title,
        description="Pick one slot per day",
        questions=[
            {
                "text": f"Day {index + 1}",
                "order": index + 1,
                "options": [
                    {"text": f"Slot {index + 1}.{pos + 1}", "limit": limit}
                    for pos, limit in enumerate(limits)
                ],
            }
            for index, limits in enumerate(questions)
        ],
    )


async def create_form(store, *questions: Sequence[Optional[int]]) -> Form:
    return await store.forms.create_full_form(form_from_payload(form_payload(*questions)))

