"""Utility functions for elkalert."""

import ipaddress
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def format_count(count: Union[int, float]) -> str:
    """Format an event count as a minimal decimal.
    
    Args:
        count: Integer-valued count
        
    Returns:
        String like "42", never "42.0" or "4.2e+01"
    """
    if isinstance(count, float):
        if not count.is_integer():
            raise ValueError(f"Count must be integer-valued: {count}")
        count = int(count)
    return str(count)


def parse_ip(ip_string: str) -> Optional[IPAddress]:
    """Parse an IPv4 or IPv6 literal.
    
    Args:
        ip_string: String to parse
        
    Returns:
        Parsed address or None if not a valid IP
    """
    try:
        return ipaddress.ip_address(ip_string)
    except ValueError:
        return None
