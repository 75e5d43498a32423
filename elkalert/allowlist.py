"""Whitelisted client addresses."""

import ipaddress
import logging
from typing import Iterable

from elkalert.errors import InvalidAddress
from elkalert.utils import IPAddress, parse_ip

logger = logging.getLogger(__name__)


def _canonical(ip: IPAddress) -> IPAddress:
    # ::ffff:a.b.c.d is the same host as a.b.c.d
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


class AllowSet:
    """Set of IP addresses exempt from alerting.
    
    Membership compares parsed addresses, so "::1" and
    "0:0:0:0:0:0:0:1" are the same entry.
    """
    
    def __init__(self, addresses: Iterable[IPAddress] = ()):
        self._addresses = frozenset(_canonical(ip) for ip in addresses)
    
    @classmethod
    def build(cls, entries: Iterable[str]) -> "AllowSet":
        """Build from whitelist strings.
        
        Args:
            entries: IP address literals
            
        Returns:
            AllowSet object
            
        Raises:
            InvalidAddress: Any entry is not a valid IP, listing all of them
        """
        addresses = []
        invalid = []
        
        for entry in entries:
            ip = parse_ip(entry.strip()) if isinstance(entry, str) else None
            if ip is None:
                invalid.append(entry)
            else:
                addresses.append(ip)
        
        if invalid:
            raise InvalidAddress(invalid)
        
        logger.debug(f"Whitelist built with {len(addresses)} entries")
        return cls(addresses)
    
    def contains(self, candidate: str) -> bool:
        """Check whether a bucket key is whitelisted.
        
        Keys that are not valid IPs are never whitelisted.
        """
        ip = parse_ip(candidate)
        if ip is None:
            return False
        return _canonical(ip) in self._addresses
    
    def __contains__(self, candidate: object) -> bool:
        return isinstance(candidate, str) and self.contains(candidate)
    
    def __len__(self) -> int:
        return len(self._addresses)
    