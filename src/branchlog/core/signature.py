"""Signature status code classification."""

import logging

from branchlog.core.models import SignatureSeverity

logger = logging.getLogger(__name__)

# git log %G? codes. Trust-unknown counts as good, expired signatures and
# expired keys need attention.
SIGNATURE_SEVERITY: dict[str, SignatureSeverity] = {
    "G": SignatureSeverity.GOOD,
    "U": SignatureSeverity.GOOD,
    "X": SignatureSeverity.CAUTION,
    "Y": SignatureSeverity.CAUTION,
    "E": SignatureSeverity.CAUTION,
    "B": SignatureSeverity.BAD,
    "R": SignatureSeverity.BAD,
    "N": SignatureSeverity.NONE,
}

DEFAULT_SEVERITY = SignatureSeverity.CAUTION

UNCHECKABLE_STATUS = "E"


def classify_signature(status: str) -> SignatureSeverity:
    """Map a signature status code to a severity tone.

    Unknown codes are not an error: they fall through to CAUTION so an
    unexpected value from a newer git never renders as trustworthy.
    """
    severity = SIGNATURE_SEVERITY.get(status)
    if severity is None:
        logger.debug(f"Unknown signature status {status!r}, using {DEFAULT_SEVERITY.value}")
        return DEFAULT_SEVERITY
    return severity
