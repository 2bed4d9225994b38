"""Settlement — расчёт минимального (эвристически) набора платежей.

- Group matching: точные группы с нулевой суммой размером 2..max_group_size
- Residual matching: жадное погашение оставшихся балансов
"""

from .engine import (
    SettlementConfig,
    SettlementEngine,
    SettlementResult,
    clear_parties,
    default_group_size,
    find_zero_sum_groups,
    split_parties,
)

__all__ = [
    "SettlementConfig",
    "SettlementEngine",
    "SettlementResult",
    "clear_parties",
    "default_group_size",
    "find_zero_sum_groups",
    "split_parties",
]
