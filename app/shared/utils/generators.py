"""ID and value generators (CUID, flow document ids)."""

import re

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Used for documents whose id carries no meaning (activity log entries).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def new_flow_id(name: str, timestamp_ms: int) -> str:
    """Id for a newly created flow: lowercased name with non [a-z0-9] as '_', plus millis.

    >>> new_flow_id("Women Shoes", 1700000000000)
    'women_shoes_1700000000000'
    """
    return f"{_NON_ALNUM.sub('_', name.lower())}_{timestamp_ms}"


def cloned_flow_id(base_name: str, timestamp_ms: int) -> str:
    """Id for a clone: lowercased base name with non [a-z0-9] as '_', '_copy_', millis.

    >>> cloned_flow_id("Shoes / Boots", 1700000000000)
    'shoes___boots_copy_1700000000000'
    """
    return f"{_NON_ALNUM.sub('_', base_name.lower())}_copy_{timestamp_ms}"
