"""Default disposition catalog.

Run with ``python -m app.infrastructure.seed_dispositions`` after migrations. Existing
entries are left untouched, so the seed can be re-run safely.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.adapters.outbound.persistence.models import (
    FirstLevelDispositionModel,
    SecondLevelDispositionModel,
    ThirdLevelDispositionModel,
)
from app.domain.entities.disposition import (
    CONTACTED,
    NO_SALE,
    NOT_CONTACTED,
    SALE,
    ReasonCategory,
)
from app.infrastructure.db import get_db_session
from app.infrastructure.logging.logger import log_operation

FIRST_LEVEL = [
    (CONTACTED, "Lead was successfully contacted"),
    (NOT_CONTACTED, "Lead was not contacted"),
]

SECOND_LEVEL = [
    (SALE, "Lead converted to sale"),
    (NO_SALE, "Lead did not convert to sale"),
]

THIRD_LEVEL = {
    ReasonCategory.NO_SALE: [
        ("Not Interested", "Lead expressed no interest in the product"),
        ("Price Too High", "Lead found the price unaffordable"),
        ("Already Has Solution", "Lead already has a similar product/service"),
        ("Needs More Time", "Lead needs more time to decide"),
        ("Budget Constraints", "Lead has budget limitations"),
    ],
    ReasonCategory.NOT_CONTACTED: [
        ("Wrong Number", "Phone number is incorrect or invalid"),
        ("No Answer", "Lead did not answer the call"),
        ("Voicemail", "Call went to voicemail"),
        ("Number Busy", "Phone line was busy"),
        ("Call Back Later", "Lead requested to be called back later"),
    ],
}


def seed_dispositions(session: Session) -> int:
    """
    Insert missing default dispositions.

    Args:
        session: Open session; the caller commits

    Returns:
        Number of entries created
    """
    created = 0

    for model_class, entries in (
        (FirstLevelDispositionModel, FIRST_LEVEL),
        (SecondLevelDispositionModel, SECOND_LEVEL),
    ):
        existing = set(session.scalars(select(model_class.name)).all())
        for name, description in entries:
            if name not in existing:
                session.add(model_class(name=name, description=description, is_active=True))
                created += 1

    existing_reasons = set(
        session.execute(
            select(ThirdLevelDispositionModel.name, ThirdLevelDispositionModel.category)
        ).all()
    )
    for category, entries in THIRD_LEVEL.items():
        for name, description in entries:
            if (name, category.value) not in existing_reasons:
                session.add(
                    ThirdLevelDispositionModel(
                        name=name,
                        description=description,
                        category=category.value,
                        is_active=True,
                    )
                )
                created += 1

    session.flush()
    return created


def main() -> None:
    session = get_db_session()
    try:
        created = seed_dispositions(session)
        session.commit()
    finally:
        session.close()
    log_operation(operation="seed_dispositions", request_id=None, component="seed", created=created)


if __name__ == "__main__":
    main()
