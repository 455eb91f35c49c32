"""
Health checks - for load balancers, Kubernetes, and monitoring.
Fast liveness; readiness pings Elasticsearch and checks the cluster name.
"""

import logging
from typing import Annotated

from elasticsearch import AsyncElasticsearch, ApiError, TransportError
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.search.elasticsearch_client import get_elasticsearch

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(es: Annotated[AsyncElasticsearch, Depends(get_elasticsearch)]):
    """Readiness: cluster reachable and is the one we are configured for?"""
    try:
        info = await es.info()
    except (ApiError, TransportError) as e:
        logger.warning("readiness: elasticsearch unreachable: %s", e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "reason": "elasticsearch unreachable"},
        )
    cluster_name = getattr(info, "body", info).get("cluster_name")
    if cluster_name != settings.elasticsearch_cluster_name:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unavailable",
                "reason": f"unexpected cluster {cluster_name!r}",
            },
        )
    return {"status": "ready", "cluster_name": cluster_name}
