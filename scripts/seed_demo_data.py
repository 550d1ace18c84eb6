"""
Seed a local database with a handful of staff, onboarding documents and
training assignments so the dashboard has something to show.

Run with:
    python scripts/seed_demo_data.py
"""

from __future__ import annotations

import asyncio
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

# Allow importing the src package when run from any directory
sys.path.insert(0, str(Path(__file__).parent.parent))

import structlog  # noqa: E402
from sqlalchemy import select  # noqa: E402
from src.core.logging import setup_logging  # noqa: E402
from src.infrastructure.db.base import Base  # noqa: E402
from src.infrastructure.db.models import (  # noqa: E402
    AuditLog,
    DocumentAcknowledgment,
    HRRecord,
    OnboardingDocument,
    ProgressStatus,
    TrainingAssignment,
    TrainingModule,
    UserModel,
    UserRole,
)
from src.infrastructure.db.session import dispose_engine, get_session_factory  # noqa: E402

logger = structlog.get_logger()

STAFF = [
    ("ada@example.com", "Ada", "Lovelace", "Engineering"),
    ("grace@example.com", "Grace", "Hopper", "Engineering"),
    ("mary@example.com", "Mary", "Seacole", "Care"),
]

DOCUMENTS = [
    ("Employment Contract", True),
    ("Bank Details Form", True),
    ("Emergency Contacts", True),
    ("Car Parking Request", False),
]

MODULES = [
    ("Fire Safety", True),
    ("Manual Handling", True),
    ("Customer Service Basics", False),
]


async def seed() -> None:
    session_factory = get_session_factory()
    async with session_factory() as session:
        await session.run_sync(lambda s: Base.metadata.create_all(s.connection()))

        if await session.scalar(select(UserModel.id).limit(1)):
            logger.info("seed_skipped", reason="users already present")
            return

        now = datetime.now(UTC)
        admin = UserModel(
            email="admin@example.com", first_name="Site", last_name="Admin", role=UserRole.ADMIN
        )
        staff = [
            UserModel(email=email, first_name=first, last_name=last, department=dept)
            for email, first, last, dept in STAFF
        ]
        documents = [
            OnboardingDocument(title=title, is_required=required, order_index=index)
            for index, (title, required) in enumerate(DOCUMENTS)
        ]
        modules = [TrainingModule(title=title, is_mandatory=required) for title, required in MODULES]
        session.add_all([admin, *staff, *documents, *modules])
        await session.flush()

        for offset, user in enumerate(staff):
            for index, document in enumerate(documents):
                done = index < len(documents) - offset - 1
                session.add(
                    DocumentAcknowledgment(
                        document_id=document.id,
                        user_id=user.id,
                        status=ProgressStatus.COMPLETED if done else ProgressStatus.PENDING,
                        completed_at=now - timedelta(days=index) if done else None,
                        acknowledged_at=now - timedelta(days=index) if done else None,
                    )
                )
            for index, module in enumerate(modules):
                is_first = index == 0
                session.add(
                    TrainingAssignment(
                        module_id=module.id,
                        user_id=user.id,
                        is_mandatory=module.is_mandatory,
                        status=ProgressStatus.COMPLETED if is_first else ProgressStatus.IN_PROGRESS,
                        score=70 + 10 * offset if is_first else None,
                        watched_percentage=100 if is_first else 30 * (offset + 1),
                        completed_at=now if is_first else None,
                    )
                )
            session.add(
                HRRecord(
                    user_id=user.id,
                    record_type="contract_amendment",
                    title="Hours change",
                    acknowledged_at=now - timedelta(hours=offset + 1),
                )
            )
            session.add(
                AuditLog(
                    user_id=admin.id,
                    action="create_user",
                    changes={"name": f"{user.first_name} {user.last_name}"},
                    created_at=now - timedelta(days=30),
                )
            )

        await session.commit()
        logger.info(
            "seed_completed",
            staff=len(staff),
            documents=len(documents),
            modules=len(modules),
        )


async def main() -> None:
    setup_logging()
    try:
        await seed()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
