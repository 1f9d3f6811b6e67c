"""CheckService: validate JSON documents against catalog atoms.

Backs the ``check``, ``atoms`` and ``render`` commands. Documents arrive as
JSON text; rules are built from atom names with :func:`unless`, so a
prefix like ``"config"`` yields labels such as ``"config is missing"``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from valparse.domain.atoms import ATOMS, Atom, get_atom, not_one_of, unless
from valparse.domain.errors import ValidationError
from valparse.domain.evaluate import validate
from valparse.domain.rules import RuleSet
from valparse.domain.serialize import serialize
from valparse.services.result import CommandError, CommandResult
from valparse.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from valparse.config.settings import VpSettings

logger = logging.getLogger(__name__)


class _BadInput(Exception):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class CheckService:
    """Runs catalog-atom validation for the CLI."""

    def __init__(self, settings: VpSettings) -> None:
        self._settings = settings

    def _render(self, value: Any) -> str:
        cfg = self._settings.serialize
        return serialize(value, max_length=cfg.max_length, keep=cfg.keep)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def check(
        self,
        document: str,
        *,
        atoms: Sequence[str] = (),
        prefix: str | None = None,
        one_of: str | None = None,
    ) -> CommandResult:
        """Validate a JSON *document* against the named atoms."""
        op = "check"
        try:
            data = _load(document, "document")
            with trace_span("compile") as span:
                rules = self._build_rules(atoms, prefix, one_of)
                if span:
                    span.annotate("rules", len(rules.entries))
        except _BadInput as exc:
            return CommandResult(
                ok=False, op=op, error=CommandError(code=exc.code, message=str(exc))
            )

        warnings: list[str] = []
        if not rules.entries:
            warnings.append("No rules given; the document is accepted as-is")

        try:
            with trace_span("validate"):
                value = validate(data, rules)
        except ValidationError as exc:
            failure = exc.failure
            logger.info("Check failed: %s", failure.label)
            return CommandResult(
                ok=False,
                op=op,
                error=CommandError(
                    code=failure.kind.value.upper(),
                    message=str(exc),
                    detail={
                        **failure.model_dump(mode="json", exclude_none=True),
                        "data": self._render(exc.data),
                    },
                ),
            )

        return CommandResult(
            ok=True,
            op=op,
            data={"value": self._render(value), "rules": rules.labels},
            warnings=warnings,
        )

    @traced
    def atoms(self) -> CommandResult:
        """List the atom catalog."""
        items = [{"name": name, "label": item.label} for name, item in ATOMS.items()]
        return CommandResult(ok=True, op="atoms", data={"items": items, "count": len(items)})

    @traced
    def render(self, document: str) -> CommandResult:
        """Render a JSON *document* the way failure messages show it."""
        try:
            data = _load(document, "document")
        except _BadInput as exc:
            return CommandResult(
                ok=False, op="render", error=CommandError(code=exc.code, message=str(exc))
            )
        return CommandResult(ok=True, op="render", data={"rendered": self._render(data)})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_rules(
        self, names: Sequence[str], prefix: str | None, one_of: str | None
    ) -> RuleSet:
        cfg = self._settings.check
        names = list(names) or list(cfg.default_atoms)
        prefix = cfg.prefix if prefix is None else prefix

        selected: list[Atom] = []
        for name in names:
            try:
                selected.append(get_atom(name))
            except KeyError as exc:
                raise _BadInput("UNKNOWN_ATOM", exc.args[0]) from exc
        if one_of is not None:
            allowed = _load(one_of, "--one-of value")
            if not isinstance(allowed, (list, dict)):
                raise _BadInput("BAD_INPUT", "--one-of expects a JSON array or object")
            selected.append(not_one_of(allowed))

        if prefix:
            return RuleSet.compile(unless(prefix, *selected))
        return RuleSet.compile(unless(*selected))


def _load(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise _BadInput("BAD_INPUT", f"Invalid JSON in {what}: {exc}") from exc
