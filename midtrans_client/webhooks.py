"""FastAPI router that receives Midtrans notifications."""

import json
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from .core import CoreApi
from .exceptions import ConfigurationError, MidtransError, MidtransNotificationError
from .snap_bi import SnapBi, SnapBiConfig

logger = logging.getLogger(__name__)


def create_webhook_router(
    snap_bi_config: SnapBiConfig,
    core_api: Optional[CoreApi] = None,
    prefix: str = "/webhooks",
) -> APIRouter:
    """Build a router with notification endpoints.

    ``POST {prefix}/snap-bi`` verifies Snap BI notification signatures against
    the configured public key. ``POST {prefix}/notification`` resolves Core and
    Snap HTTP notifications through the transaction status API and is only
    mounted when ``core_api`` is given.
    """
    router = APIRouter(prefix=prefix)

    @router.post("/snap-bi")
    async def snap_bi_webhook(request: Request):
        """Verify a Snap BI notification."""
        signature = request.headers.get("X-SIGNATURE")
        timestamp = request.headers.get("X-TIMESTAMP")
        if not signature or not timestamp:
            raise HTTPException(
                status_code=400, detail="Missing X-SIGNATURE or X-TIMESTAMP"
            )

        try:
            payload = json.loads(await request.body())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid JSON payload: {exc}")
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Payload must be a JSON object")

        try:
            verified = await (
                SnapBi.notification(snap_bi_config)
                .with_notification_payload(payload)
                .with_signature(signature)
                .with_timestamp(timestamp)
                .with_notification_url_path(request.url.path)
                .is_webhook_notification_verified()
            )
        except ConfigurationError as exc:
            logger.error("Cannot verify Snap BI notification: %s", exc)
            raise HTTPException(status_code=500, detail="Webhook verification unavailable")

        if not verified:
            logger.warning("Rejected Snap BI notification on %s", request.url.path)
            raise HTTPException(status_code=401, detail="Invalid signature")

        logger.info(
            "Received Snap BI notification %s: %s",
            payload.get("originalReferenceNo") or payload.get("originalPartnerReferenceNo"),
            payload.get("latestTransactionStatus"),
        )
        return {"received": True}

    if core_api is not None:

        @router.post("/notification")
        async def http_notification(request: Request):
            """Resolve a Core/Snap notification to its current status."""
            try:
                payload = (await request.body()).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise HTTPException(status_code=400, detail=f"Invalid notification body: {exc}")
            try:
                status = await core_api.transaction.notification(payload)
            except MidtransNotificationError as exc:
                raise HTTPException(status_code=400, detail=str(exc))
            except MidtransError as exc:
                logger.error("Failed to resolve notification: %s", exc.full_message)
                raise HTTPException(status_code=502, detail="Transaction status unavailable")

            transaction_status = status.get("transaction_status")
            order_id = status.get("order_id")
            if transaction_status in ("capture", "settlement"):
                logger.info("Order %s paid (%s)", order_id, transaction_status)
            elif transaction_status in ("deny", "cancel", "expire", "failure"):
                logger.warning("Order %s not paid: %s", order_id, transaction_status)
            else:
                logger.info("Order %s is %s", order_id, transaction_status)
            return status

    return router
