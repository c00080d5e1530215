import json

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from propchat.config import PipelineSettings
from propchat.db.base_class import Base
from propchat.db.models import Listing

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeLLM:
    """
    Canned completion service. Picks a reply by recognising which
    instruction template it was handed.
    """

    def __init__(self, intent=None, filters=None, narrative="Here is what I found.",
                 company="Our office is in Business Bay.", chat="Hello there!", fail=()):
        self.replies = {
            "intent": intent if isinstance(intent, str) else json.dumps(intent or {}),
            "extract": filters if isinstance(filters, str) else json.dumps(filters or {}),
            "property": narrative,
            "company": company,
            "chat": chat,
        }
        self.fail = set(fail)
        self.calls = []

    @staticmethod
    def kind_of(system_prompt: str) -> str:
        if "Intent Classifier" in system_prompt:
            return "intent"
        if "Extract the search filters" in system_prompt:
            return "extract"
        if "TOP MATCHING PROPERTIES" in system_prompt:
            return "property"
        if "COMPANY DETAILS" in system_prompt:
            return "company"
        return "chat"

    async def get_chat_response(self, system_prompt: str, user_message: str) -> str:
        kind = self.kind_of(system_prompt)
        self.calls.append((kind, system_prompt, user_message))
        if kind in self.fail or "all" in self.fail:
            raise RuntimeError("completion service unavailable")
        return self.replies[kind]

    def kinds(self):
        return [c[0] for c in self.calls]


class FakeRepository:
    def __init__(self, listings=None, error=None):
        self.listings = listings or []
        self.error = error
        self.calls = []

    async def find(self, query, sort, limit=500):
        self.calls.append((query, sort, limit))
        if self.error:
            raise self.error
        return list(self.listings[:limit])


def sample_listings():
    return [
        Listing(id=1, name="Damac Hills Villa A", area="Damac Hills", developer="DAMAC",
                property_type="Villa", bedrooms=3, bathrooms=4, min_price=1_800_000, max_price=2_200_000,
                area_sqft=2800, status="Ready", sale_status="Available",
                amenities=["Swimming Pool", "Gym", "Parking"], floor=1, furnished="Unfurnished",
                payment_plan="Installment", description="Corner villa backing onto the park."),
        Listing(id=2, name="Damac Hills Villa B", area="Damac Hills", developer="DAMAC",
                property_type="Villa", bedrooms=4, bathrooms=5, min_price=3_500_000, max_price=4_000_000,
                area_sqft=3600, status="Off Plan", sale_status="Available",
                amenities=["Swimming Pool", "Garden"], floor=1, furnished="Unfurnished",
                payment_plan="Installment", description="Golf-facing villa."),
        Listing(id=3, name="Downtown Residence", area="Downtown Dubai", developer="Emaar",
                property_type="Apartment", bedrooms=2, bathrooms=2, min_price=1_200_000, max_price=1_500_000,
                area_sqft=1100, status="Ready", sale_status="Available",
                amenities=["Gym", "Parking"], floor=25, furnished="Furnished",
                payment_plan="Mortgage", description="Burj views."),
        Listing(id=4, name="Marina Studio", area="Dubai Marina", developer="Select Group",
                property_type="Studio", bedrooms=None, bathrooms=1, min_price=600_000, max_price=750_000,
                area_sqft=450, status="Ready", sale_status="Reserved",
                amenities=["Gym"], floor=12, furnished="Furnished",
                payment_plan="Cash", description="Compact marina studio."),
        Listing(id=5, name="Ranches Townhouse", area="Arabian Ranches", developer="Emaar",
                property_type="Townhouse", bedrooms=3, bathrooms=3, min_price=2_400_000, max_price=2_600_000,
                area_sqft=2200, status="Under Construction", sale_status="Available",
                amenities=["Parking"], floor=2, furnished="Unfurnished",
                payment_plan="Installment", description="Family townhouse."),
        Listing(id=6, name="Damac Hills Apartment", area="Damac Hills", developer="DAMAC",
                property_type="Apartment", bedrooms=3, bathrooms=2, min_price=1_500_000, max_price=1_700_000,
                area_sqft=1600, status="Ready", sale_status="Available",
                amenities=[], floor=8, furnished="Semi-furnished",
                payment_plan="Mortgage", description="Mid-rise apartment."),
    ]


async def make_session(with_data: bool = True):
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    if with_data:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    session = factory()
    if with_data:
        session.add_all(sample_listings())
        await session.commit()
    return engine, session


@pytest.fixture
def pipeline_settings():
    return PipelineSettings(model="test-model", llm_timeout=1.0, store_timeout=1.0)


@pytest_asyncio.fixture
async def db_session():
    engine, session = await make_session()
    yield session
    await session.close()
    await engine.dispose()


@pytest_asyncio.fixture
async def empty_db_session():
    """A session on a database with no tables: every query fails."""
    engine, session = await make_session(with_data=False)
    yield session
    await session.close()
    await engine.dispose()
