"""Memory hotplug block alignment shared by validators and block sizing."""

from .quantity import Quantity

# Guest memory is plugged in blocks of this size; guest and maxGuest must be multiples.
MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES = 0x200000


def is_aligned(quantity: Quantity, alignment: int = MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES) -> bool:
    """True if the quantity's byte value is an exact multiple of alignment."""
    return quantity.value() % alignment == 0


def alignment_quantity(alignment: int = MEMORY_HOTPLUG_BLOCK_ALIGNMENT_BYTES) -> Quantity:
    """Alignment as a binary-SI quantity, e.g. 2Mi."""
    return Quantity.from_bytes(alignment)
