"""
Publisher API routes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import authorize, get_publisher_directory
from api.schemas.publishers import PublisherCreateRequest, PublisherResponse
from core.access import Authenticated, IsAdmin
from core.errors import Conflict
from infrastructure.repositories import PublisherDirectory, PublisherExistsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/publishers", tags=["Publishers"])

Publishers = Annotated[PublisherDirectory, Depends(get_publisher_directory)]


@router.get("", response_model=list[PublisherResponse])
async def list_publishers(publishers: Publishers):
    return await publishers.list_all()


@router.post(
    "",
    response_model=PublisherResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(authorize(Authenticated(), IsAdmin()))],
)
async def create_publisher(body: PublisherCreateRequest, publishers: Publishers):
    try:
        publisher = await publishers.create(body.name, body.logo_url)
    except PublisherExistsError as e:
        raise Conflict(str(e)) from e
    logger.info("Publisher %s added", publisher.name)
    return publisher
