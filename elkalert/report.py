"""Alert report formatting."""

from typing import Final, Optional, Sequence, Union

from elkalert.models import AlertLine


class _NoData:
    """Marker for a run where nothing exceeded the threshold."""
    
    _instance: Optional["_NoData"] = None
    
    def __new__(cls) -> "_NoData":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def __repr__(self) -> str:
        return "NO_DATA"
    
    def __bool__(self) -> bool:
        return False


NO_DATA: Final = _NoData()

Report = Union[str, _NoData]


def format_report(
    lines: Sequence[AlertLine],
    title: Optional[str] = None
) -> Report:
    """Render offending buckets as a message.
    
    Args:
        lines: Offending buckets in report order
        title: Optional first line
        
    Returns:
        Report text, one "<count> <key>" line each, or NO_DATA when
        there is nothing to report
    """
    if not lines:
        return NO_DATA
    
    body = "".join(f"{line.render()}\n" for line in lines)
    
    if title:
        return f"{title}\n{body}"
    return body


def is_no_data(report: Report) -> bool:
    """Check for the NO_DATA marker."""
    return report is NO_DATA
