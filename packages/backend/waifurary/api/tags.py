from fastapi import APIRouter, Depends

from ..models.metadata import TagWithCount
from ..services.aggregator import MetadataAggregator
from ._utils import get_aggregator

router = APIRouter()


@router.get("", response_model=list[str])
def get_all_tags(aggregator: MetadataAggregator = Depends(get_aggregator)):
    return aggregator.all_tags()


@router.get("/counts", response_model=list[TagWithCount])
def get_all_tags_with_count(aggregator: MetadataAggregator = Depends(get_aggregator)):
    # most used first, ties by name
    return aggregator.tags_with_count()
