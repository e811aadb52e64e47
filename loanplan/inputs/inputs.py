# loanplan/inputs/inputs.py
"""
Inputs loader for the loan planner.

Goals
-----
- Deterministic, file-first inputs with validation via Pydantic.
- Accepts a bare optimizer request (including the camelCase keys used by the
  older planner front end) as well as a structured shape with run options.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Legacy (root = OptimizationInput, snake_case or camelCase)
   {
     "existingLoans": [{"id": "card", "principal": 50000, "apr": 18, "months": 36}],
     "cashAvailable": 10000,
     "upcomingExpense": 15000,
     "newLoanAPR": 10,
     "candidateTerms": [36, 48, 60],
     "objective": "minTotalInterest"
   }

2) Structured (root = AppInputs)
   {
     "inputs": { ... OptimizationInput ... },
     "run": {
       "out": "plan.json",
       "log_level": "INFO"
     }
   }

Environment overrides (optional)
--------------------------------
- LOANPLAN_OUT        -> AppInputs.run.out
- LOANPLAN_LOG_LEVEL  -> AppInputs.run.log_level
- LOANPLAN_OBJECTIVE  -> AppInputs.inputs.objective (known objectives only)
- LOANPLAN_BUDGET     -> AppInputs.inputs.budget_monthly (float)

Public API
----------
- class InputsLoader:
    - load(path: str | Path | None) -> AppInputs
    - load_json(text: str) -> AppInputs
    - with_overrides(**kwargs) -> AppInputs (non-destructive copies)
- function load_inputs(path: str | Path | None) -> AppInputs  (convenience)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, Field, ValidationError

from loanplan.schemas.models import OptimizationInput

OBJECTIVES = ("min_total_interest", "min_monthly_payment")

# camelCase request keys from the older planner front end
_LEGACY_KEYS = {
    "existingLoans": "existing_loans",
    "cashAvailable": "cash_available",
    "upcomingExpense": "upcoming_expense",
    "newLoanAPR": "new_loan_apr",
    "candidateTerms": "candidate_terms",
    "budgetMonthly": "budget_monthly",
}
_LEGACY_OBJECTIVES = {
    "minTotalInterest": "min_total_interest",
    "minMonthly": "min_monthly_payment",
}

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling the planning run."""

    out: str | None = Field(None, description="Path to write the JSON result (optional).")
    log_level: str = Field("WARNING", description="Logging level name for the CLI (DEBUG, INFO, WARNING, ...).")


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        inputs: The validated OptimizationInput used by the optimizer.
        run:    Non-financial, runtime options for the current execution.
    """

    inputs: OptimizationInput
    run: RunOptions = RunOptions()


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Default search (when path=None):
        1) ./data/sample/plan.json
        2) ./config.json
    """

    env_prefix: str = "LOANPLAN_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> AppInputs:
        """Load inputs from a JSON file (path). If path is None, try defaults."""
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        data = self._maybe_translate_legacy(raw)
        cfg = self._parse_root(data)
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> AppInputs:
        """Load inputs from a JSON string (legacy or structured shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Inputs JSON must be an object.")
        data = self._maybe_translate_legacy(raw)
        cfg = self._parse_root(data)
        return self._apply_env_overrides(cfg)

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        log_level: str | None = None,
        objective: str | None = None,
        budget: float | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied.
        Does not mutate the original instance.
        """
        run_updates: dict[str, Any] = {}
        if out is not None:
            run_updates["out"] = out
        if log_level is not None:
            run_updates["log_level"] = log_level.upper()

        input_updates: dict[str, Any] = {}
        if objective is not None:
            if objective not in OBJECTIVES:
                raise ValueError(f"Unknown objective {objective!r}; expected one of {OBJECTIVES}.")
            input_updates["objective"] = objective
        if budget is not None:
            input_updates["budget_monthly"] = budget

        return self._merge(cfg, run_updates, input_updates)

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        for candidate in (Path("data/sample/plan.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError(
            "No inputs path provided and no default inputs found. Looked for ./data/sample/plan.json and ./config.json."
        )

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"Inputs JSON in {p} must be an object.")
        return cast(dict[str, Any], raw)

    def _maybe_translate_legacy(self, raw: dict[str, Any]) -> dict[str, Any]:
        """
        Accept legacy (OptimizationInput at root) or structured (AppInputs shape).
        camelCase keys and objective names are mapped to their snake_case forms.
        """
        if "inputs" in raw:
            return raw

        translated = {_LEGACY_KEYS.get(k, k): v for k, v in raw.items()}
        objective = translated.get("objective")
        if isinstance(objective, str):
            translated["objective"] = _LEGACY_OBJECTIVES.get(objective, objective)
        return {"inputs": translated}

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """Apply light, optional overrides from environment variables."""
        prefix = self.env_prefix
        run_updates: dict[str, Any] = {}
        input_updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            run_updates["out"] = out

        log_level = os.getenv(f"{prefix}LOG_LEVEL")
        if log_level:
            run_updates["log_level"] = log_level.strip().upper()

        objective = os.getenv(f"{prefix}OBJECTIVE")
        if objective:
            normalized = objective.strip().lower()
            if normalized in OBJECTIVES:
                input_updates["objective"] = normalized

        budget = os.getenv(f"{prefix}BUDGET")
        if budget:
            try:
                input_updates["budget_monthly"] = float(budget)
            except ValueError:
                # Ignore bad value; keep validated budget
                pass

        return self._merge(cfg, run_updates, input_updates)

    @staticmethod
    def _merge(cfg: AppInputs, run_updates: dict[str, Any], input_updates: dict[str, Any]) -> AppInputs:
        if not run_updates and not input_updates:
            return cfg
        update: dict[str, Any] = {}
        if run_updates:
            update["run"] = cfg.run.model_copy(update=run_updates)
        if input_updates:
            update["inputs"] = cfg.inputs.model_copy(update=input_updates)
        return cfg.model_copy(update=update)


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path | None = None) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
