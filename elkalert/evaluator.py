"""Threshold evaluation of aggregation buckets."""

import logging

from elkalert.allowlist import AllowSet
from elkalert.models import AggregationResult, AlertLine

logger = logging.getLogger(__name__)


def evaluate(
    result: AggregationResult,
    threshold: int,
    allow: AllowSet
) -> list[AlertLine]:
    """Find buckets whose count exceeds the threshold.
    
    A bucket is reported when its count is strictly greater than the
    threshold and its key is not whitelisted. Bucket order is kept and
    repeated keys are reported as often as they occur.
    
    Args:
        result: Decoded aggregation buckets
        threshold: Exclusive count limit
        allow: Whitelisted addresses
        
    Returns:
        Offending buckets, possibly empty
    """
    if threshold < 0:
        raise ValueError(f"Threshold must be non-negative: {threshold}")
    
    lines = []
    
    for bucket in result.buckets:
        if bucket.count <= threshold:
            continue
        
        if allow.contains(bucket.key):
            logger.debug(f"Whitelisted: {bucket.key} ({bucket.count})")
            continue
        
        lines.append(AlertLine(count=bucket.count, key=bucket.key))
    
    logger.info(
        f"{len(lines)} of {len(result.buckets)} buckets above threshold {threshold}"
    )
    return lines
