"""
Pytest configuration and fixtures.
"""

import copy
import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Dict, List, Optional
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fixitnow.application.interfaces.repositories import (
    JobRepositoryInterface,
    PayoutRepositoryInterface,
)
from fixitnow.application.interfaces.services import NotifierInterface
from fixitnow.application.services.location_sanitizer import sanitize_job_changes
from fixitnow.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from fixitnow.application.services.retry_handler import OptimisticRetryHandler
from fixitnow.domain.entities.job import Job
from fixitnow.domain.exceptions.not_found_error import NotFoundError
from fixitnow.domain.exceptions.state_error import ConcurrencyConflictError
from fixitnow.domain.value_objects.actor import ActorRef
from fixitnow.domain.value_objects.location import JobLocation
from fixitnow.domain.value_objects.timestamps import utcnow
from fixitnow.infrastructure.database.models import Base
from fixitnow.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class InMemoryJobRepository(JobRepositoryInterface):
    """Version-checked job store keeping deep copies, like a real table would."""

    def __init__(self):
        self.jobs: Dict[UUID, Job] = {}
        self.save_calls = 0

    async def create(self, job: Job) -> Job:
        job.prepare_for_creation()
        self.jobs[job.id] = copy.deepcopy(job)
        return copy.deepcopy(job)

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        job = self.jobs.get(job_id)
        return copy.deepcopy(job) if job else None

    async def save(self, job: Job) -> Job:
        self.save_calls += 1
        stored = self.jobs.get(job.id)
        if stored is None:
            raise NotFoundError("Job", job.id)
        if stored.version != job.version:
            raise ConcurrencyConflictError("Job", str(job.id), job.version)
        job.version += 1
        job.updated_at = utcnow()
        self.jobs[job.id] = copy.deepcopy(job)
        return job

    async def apply_update(self, job_id, changes, expected_version=None) -> Job:
        stored = self.jobs.get(job_id)
        if stored is None:
            raise NotFoundError("Job", job_id)
        if expected_version is not None and stored.version != expected_version:
            raise ConcurrencyConflictError("Job", str(job_id), expected_version)
        for key, value in sanitize_job_changes(changes).items():
            setattr(stored, key, value)
        stored.__post_init__()
        stored.version += 1
        return copy.deepcopy(stored)

    async def find_overdue_invoices(self, now: datetime, limit: int = 200) -> List[Job]:
        return [
            copy.deepcopy(job)
            for job in self.jobs.values()
            if job.invoice and job.invoice.is_overdue(now)
        ][:limit]

    async def get_settled_earnings(self, professional_id: UUID) -> float:
        return sum(
            job.commission.provider_earnings
            for job in self.jobs.values()
            if job.professional_id == professional_id
            and job.commission
            and job.payment_status.value in ("paid", "cash_verified")
        )


@pytest.fixture
def user_id():
    return uuid4()


@pytest.fixture
def professional_id():
    return uuid4()


@pytest.fixture
def customer(user_id):
    return ActorRef.user(user_id)


@pytest.fixture
def professional(professional_id):
    return ActorRef.professional(professional_id)


@pytest.fixture
def admin():
    return ActorRef.admin(uuid4())


@pytest.fixture
def sample_location():
    return JobLocation(address="12 MG Road", city="Bengaluru", state="KA", zip_code="560001")


@pytest.fixture
def make_job(user_id, sample_location):
    """Factory for pending jobs with sensible defaults."""

    def _make_job(**overrides) -> Job:
        values = {
            "user_id": user_id,
            "category": "Plumbing",
            "location": sample_location,
            "scheduled_date": datetime.now(timezone.utc) + timedelta(days=1),
            "scheduled_time": "10:00",
            "title": "Fix leaking tap",
        }
        values.update(overrides)
        job = Job(**values)
        job.prepare_for_creation()
        return job

    return _make_job


@pytest.fixture
def mock_job_repository():
    """Mock job repository."""
    mock_repo = AsyncMock(spec=JobRepositoryInterface)

    # Mock methods
    mock_repo.get_by_id = AsyncMock()
    mock_repo.create = AsyncMock(side_effect=lambda job: job)
    mock_repo.save = AsyncMock(side_effect=lambda job: job)
    mock_repo.find_overdue_invoices = AsyncMock(return_value=[])
    mock_repo.get_settled_earnings = AsyncMock(return_value=0)

    return mock_repo


@pytest.fixture
def mock_payout_repository():
    """Mock payout repository."""
    mock_repo = AsyncMock(spec=PayoutRepositoryInterface)

    # Mock methods
    mock_repo.create = AsyncMock(side_effect=lambda payout: payout)
    mock_repo.update = AsyncMock(side_effect=lambda payout: payout)
    mock_repo.get_by_id = AsyncMock()
    mock_repo.find_by_professional = AsyncMock(return_value=[])
    mock_repo.has_outstanding = AsyncMock(return_value=False)
    mock_repo.get_reserved_amount = AsyncMock(return_value=0)

    return mock_repo


@pytest.fixture
def in_memory_job_repository():
    return InMemoryJobRepository()


@pytest.fixture
def mock_transaction_service():
    """Transaction service that runs operations without a database."""
    service = AsyncMock(spec=TransactionService)

    async def _execute(operation, name="operation"):
        return await operation()

    service.execute_in_transaction = AsyncMock(side_effect=_execute)
    return service


@pytest.fixture
def retry_handler(mock_transaction_service):
    return OptimisticRetryHandler(mock_transaction_service, max_retries=3)


@pytest.fixture
def mock_notifier():
    return AsyncMock(spec=NotifierInterface)


@pytest.fixture
def dispatcher(mock_notifier):
    return NotificationDispatcher(mock_notifier)


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()
