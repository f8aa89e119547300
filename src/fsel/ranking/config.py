"""Validated options for a ranking request.

Options are passed explicitly per call; there are no module-level defaults
to mutate. Pydantic validation errors are re-raised as InvalidArgumentError.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fsel.ranking.exceptions import InvalidArgumentError
from fsel.ranking.importance import ImportanceType

VALID_RANGES: dict[str, str] = {
    "type": "infogain, gainratio, symuncert",
    "nbins": "nbins >= 1",
    "conf_int": "0 < conf_int <= 1, or None/False to disable",
    "n_boot": "n_boot >= 1",
    "n_jobs": "n_jobs >= 1, or None for all cores",
}


class RankingConfig(BaseModel):
    """Options of an entropy-based ranking request.

    Attributes:
        type: Importance measure.
        equal: Discretize a floating-point class with equal frequency binning.
        nbins: Number of bins for ``equal``.
        disc_integers: Treat integer attributes as continuous (grouped by
            exact value) instead of as raw labels.
        conf_int: Confidence level of bootstrap bounds; None disables them.
        n_boot: Number of bootstrap draws.
        random_state: Seed for the bootstrap.
        n_jobs: Worker threads. 1 = single-threaded, None = all cores.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ImportanceType = "infogain"
    equal: bool = False
    nbins: int = Field(default=5, ge=1)
    disc_integers: bool = True
    conf_int: Annotated[float, Field(gt=0, le=1)] | None = 0.95
    n_boot: int = Field(default=1000, ge=1)
    random_state: int | None = None
    n_jobs: Annotated[int, Field(ge=1)] | None = 1

    @field_validator("conf_int", mode="before")
    @classmethod
    def disable_conf_int(cls, v: Any) -> Any:
        """Accept False as "no intervals"; reject True."""
        if v is False:
            return None
        if v is True:
            raise ValueError("conf_int must be a number between 0 and 1 or False")
        return v

    @field_validator("nbins", "n_boot", "n_jobs", mode="before")
    @classmethod
    def reject_bool(cls, v: Any) -> Any:
        """Booleans are not counts, even though bool is an int subclass."""
        if isinstance(v, bool):
            raise ValueError("expected an integer, got a boolean")
        return v

    @property
    def intervals_enabled(self) -> bool:
        return self.conf_int is not None

    @classmethod
    def build(cls, **options: Any) -> RankingConfig:
        """Validate options, raising InvalidArgumentError on the first problem."""
        try:
            return cls(**options)
        except ValidationError as exc:
            error = exc.errors()[0]
            parameter = str(error["loc"][0]) if error["loc"] else "config"
            raise InvalidArgumentError(
                error["msg"],
                parameter=parameter,
                value=error.get("input"),
                valid_range=VALID_RANGES.get(parameter),
            ) from exc
