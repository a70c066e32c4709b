from .base import AnswerSource, SourceOutcome, SourceStatus
from .dhcp import DhcpLeaseSource
from .dns import DnsTxtSource
from .partition import PartitionFingerprintSource

__all__ = [
    "AnswerSource",
    "SourceOutcome",
    "SourceStatus",
    "DhcpLeaseSource",
    "DnsTxtSource",
    "PartitionFingerprintSource",
]
