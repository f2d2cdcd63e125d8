"""Administrative tariff endpoints"""
import logging
from fastapi import APIRouter, Depends

from delivery_quote.schemas.tariff import TariffConfig, TariffUpdate
from delivery_quote.services.tariff_store import TariffStore, get_tariff_store
from delivery_quote.core.security import require_admin
from delivery_quote.core.audit_decorator import audit_log
from delivery_quote.core.enums import AuditAction
from delivery_quote.core.metrics import tariff_updates

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin/tariff", tags=["admin"])


@router.get("", response_model=TariffConfig)
async def get_tariff(
    store: TariffStore = Depends(get_tariff_store),
    current_user=Depends(require_admin)
):
    return store.current


@router.put("", response_model=TariffConfig)
@audit_log(AuditAction.REPLACE_TARIFF)
async def replace_tariff(
    payload: TariffConfig,
    store: TariffStore = Depends(get_tariff_store),
    current_user=Depends(require_admin)
):
    config = await store.replace(payload)
    tariff_updates.labels(action=str(AuditAction.REPLACE_TARIFF)).inc()
    return config


@router.patch("", response_model=TariffConfig)
@audit_log(AuditAction.UPDATE_TARIFF)
async def update_tariff(
    payload: TariffUpdate,
    store: TariffStore = Depends(get_tariff_store),
    current_user=Depends(require_admin)
):
    config = await store.update(payload)
    tariff_updates.labels(action=str(AuditAction.UPDATE_TARIFF)).inc()
    return config
