"""Single alerting run: query, evaluate, report, dispatch."""

import logging
from typing import Any, Optional

from elkalert.allowlist import AllowSet
from elkalert.config import AlertConfig
from elkalert.evaluator import evaluate
from elkalert.models import parse_aggregation
from elkalert.report import Report, format_report
from elkalert.search import SearchClient
from elkalert.webhook import DispatchOutcome, WebhookSender, dispatch

logger = logging.getLogger(__name__)


def build_report(
    response: dict[str, Any],
    config: AlertConfig,
    allow: Optional[AllowSet] = None
) -> Report:
    """Evaluate a search response against the configured threshold.
    
    Args:
        response: Decoded search response
        config: Alert configuration
        allow: Prebuilt whitelist, built from config when omitted
        
    Returns:
        Report text or NO_DATA
    """
    if allow is None:
        allow = AllowSet.build(config.whitelist)
    
    result = parse_aggregation(response)
    lines = evaluate(result, config.elk_threshold, allow)
    return format_report(lines, config.title)


def run_probe(
    config: AlertConfig,
    client: Optional[SearchClient] = None,
    sender: Optional[WebhookSender] = None,
    deliver: bool = True
) -> DispatchOutcome:
    """Run one alerting pass.
    
    The whitelist is checked before the backend is queried. Everything
    except webhook delivery raises on failure.
    
    Args:
        config: Alert configuration
        client: Optional search client, built from config when omitted
        sender: Optional webhook sender
        deliver: Set False to skip the webhook
        
    Returns:
        DispatchOutcome
    """
    allow = AllowSet.build(config.whitelist)
    
    logger.info(f"Querying {config.elk_index} on {config.elk_host}")
    if client is None:
        with SearchClient.from_config(config) as client:
            response = client.search(config.elk_index, config.elk_query)
    else:
        response = client.search(config.elk_index, config.elk_query)
    
    report = build_report(response, config, allow)
    return dispatch(report, config, sender=sender, deliver=deliver)
