"""Paired asset/market return series for regression."""

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from finance_calc.core.errors import InvalidInputError
from finance_calc.core.risk import (
    MIN_REGRESSION_POINTS,
    calculate_beta,
    calculate_correlation,
)


@dataclass(frozen=True)
class ReturnSeries:
    """
    Equal-length asset and market returns in percent, oldest first.

    Args:
        asset_returns: Periodic returns of the asset.
        market_returns: Returns of the benchmark for the same periods.

    Example:
        >>> series = ReturnSeries((10, 12, 8, 15, 9), (8, 10, 6, 12, 7))
        >>> series.beta() > 1
        True
    """

    asset_returns: tuple[float, ...]
    market_returns: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "asset_returns", tuple(float(r) for r in self.asset_returns))
        object.__setattr__(self, "market_returns", tuple(float(r) for r in self.market_returns))
        if len(self.asset_returns) != len(self.market_returns):
            raise InvalidInputError(
                f"Return series must have equal length, got "
                f"{len(self.asset_returns)} and {len(self.market_returns)}"
            )
        if len(self.asset_returns) < MIN_REGRESSION_POINTS:
            raise InvalidInputError(
                f"At least {MIN_REGRESSION_POINTS} data points are required, "
                f"got {len(self.asset_returns)}"
            )

    def __len__(self) -> int:
        return len(self.asset_returns)

    @classmethod
    def from_csv(
        cls,
        csv_path: str | Path,
        asset_column: str = "asset",
        market_column: str = "market",
    ) -> "ReturnSeries":
        """
        Load a return series from a CSV file.

        Expected CSV format:
            period,asset,market
            2020,10.0,8.0
            2021,12.0,10.0
            ...

        Rows with a missing value in either column are dropped.
        """
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"Return CSV not found: {csv_path}")

        df = pd.read_csv(csv_path)
        missing = [c for c in (asset_column, market_column) if c not in df.columns]
        if missing:
            raise InvalidInputError(
                f"Columns {missing} not found in CSV. Available: {list(df.columns)}"
            )

        df = df[[asset_column, market_column]].dropna()
        return cls(
            tuple(df[asset_column].astype(np.float64)),
            tuple(df[market_column].astype(np.float64)),
        )

    def beta(self) -> float:
        return calculate_beta(self.asset_returns, self.market_returns)

    def correlation(self) -> float:
        return calculate_correlation(self.asset_returns, self.market_returns)

    def r_squared(self) -> float:
        return self.correlation() ** 2
