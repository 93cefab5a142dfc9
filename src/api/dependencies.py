"""FastAPI dependency injection factories.

The service factory takes AsyncSession via Depends(get_async_session) and
builds one DisclosureService per request. API endpoints use it via Depends().
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.compliance.config import compliance_config_from_settings
from src.compliance.service import DisclosureService
from src.config.settings import Settings, get_settings
from src.db.session import get_async_session


async def get_disclosure_service(
    session: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> DisclosureService:
    return DisclosureService.from_session(
        session, config=compliance_config_from_settings(settings),
    )
