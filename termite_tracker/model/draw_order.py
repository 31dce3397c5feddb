from typing import List, Sequence

from .markers import Marker


def resolve_draw_order(markers: Sequence[Marker]) -> List[int]:
    """Return marker indices, most recently grabbed first.

    Markers with equal timestamps keep their original relative order.
    The result decides both which marker receives input first and which one
    is painted with the active opacity.
    """
    return sorted(range(len(markers)), key=lambda index: markers[index].last_update_time, reverse=True)


def opacity_for_rank(rank: int, active_alpha: int = 150, inactive_alpha: int = 80) -> int:
    return active_alpha if rank == 0 else inactive_alpha
