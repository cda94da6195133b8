"""Configuration of a Daubechies wavelet basis set."""

from __future__ import annotations

from typing import Any, Mapping

from wavekit.cascade import DEFAULT_GRID_SIZE
from wavekit.utils.validate import (
    validate_flag,
    validate_grid_size,
    validate_interval,
    validate_order,
)

__all__ = ["DbWaveletConfig", "KEYWORDS"]

KEYWORDS = (
    "ORDER",
    "MINIMUM",
    "MAXIMUM",
    "GRID_SIZE",
    "SCALING_FUNCTION",
    "DUMP_WAVELET_GRID",
    "LABEL",
)
_REQUIRED = ("ORDER", "MINIMUM", "MAXIMUM")


class DbWaveletConfig:
    """Configuration for DbWaveletBasis."""

    def __init__(
        self,
        order: int,
        minimum: float,
        maximum: float,
        grid_size: int = DEFAULT_GRID_SIZE,
        scaling_function: bool = False,
        dump_wavelet_grid: bool = False,
        label: str = "bf",
    ):
        """
        Args:
            order:
                Number of vanishing moments ``N`` of the Daubechies family.
            minimum:
                Lower bound of the argument interval.
            maximum:
                Upper bound of the argument interval.
            grid_size:
                Minimum number of bins of the tabulated function. Used as a
                guide only; the true number is ``(2N - 1) * 2^n``.
            scaling_function:
                If True, translates of the scaling function are used;
                otherwise translates of the wavelet function.
            dump_wavelet_grid:
                If True, the tabulated grid is written to
                ``<label>.wavelet_grid.data`` at construction.
            label:
                Name of the basis set, used for the dump file.
        """
        self.order = validate_order(order)
        self.minimum, self.maximum = validate_interval(minimum, maximum)
        self.grid_size = validate_grid_size(grid_size)
        self.scaling_function = validate_flag(scaling_function, "scaling_function")
        self.dump_wavelet_grid = validate_flag(dump_wavelet_grid, "dump_wavelet_grid")
        self.label = str(label)

    def __repr__(self) -> str:
        return (
            f"DbWaveletConfig(order={self.order}, minimum={self.minimum}, "
            f"maximum={self.maximum}, grid_size={self.grid_size}, "
            f"scaling_function={self.scaling_function}, "
            f"dump_wavelet_grid={self.dump_wavelet_grid}, label={self.label!r})"
        )

    @classmethod
    def from_keywords(cls, keywords: Mapping[str, Any]) -> "DbWaveletConfig":
        """Builds a configuration from upper-case keyword names.

        Keyword names are case-insensitive. Flags default to False,
        ``GRID_SIZE`` to 1000 and ``LABEL`` to ``"bf"``.

        Raises:
            ValueError: If a keyword is unknown or a required one is missing.
        """
        parsed = {str(key).upper(): value for key, value in keywords.items()}
        unknown = sorted(set(parsed) - set(KEYWORDS))
        if unknown:
            raise ValueError(f"unknown keywords: {', '.join(unknown)}.")
        missing = [key for key in _REQUIRED if key not in parsed]
        if missing:
            raise ValueError(f"missing required keywords: {', '.join(missing)}.")

        return cls(
            order=parsed["ORDER"],
            minimum=parsed["MINIMUM"],
            maximum=parsed["MAXIMUM"],
            grid_size=parsed.get("GRID_SIZE", DEFAULT_GRID_SIZE),
            scaling_function=parsed.get("SCALING_FUNCTION", False),
            dump_wavelet_grid=parsed.get("DUMP_WAVELET_GRID", False),
            label=parsed.get("LABEL", "bf"),
        )

    def to_keywords(self) -> dict[str, Any]:
        """Returns the configuration as a keyword mapping."""
        return {
            "ORDER": self.order,
            "MINIMUM": self.minimum,
            "MAXIMUM": self.maximum,
            "GRID_SIZE": self.grid_size,
            "SCALING_FUNCTION": self.scaling_function,
            "DUMP_WAVELET_GRID": self.dump_wavelet_grid,
            "LABEL": self.label,
        }
