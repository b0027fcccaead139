"""Pipeline orchestration for declaration generation runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .config import EventDeclConfig, load_config
from .emitter import DeclarationEmitter, render_document
from .formatting import TypeFormatter
from .logging import get_logger
from .overrides import OverrideGenerator, OverrideRegistry, install_builtin_overrides
from .snapshot import Snapshot, load_snapshot
from .writer import atomic_write

ExtraOverride = Tuple[str, str, OverrideGenerator]


@dataclass
class GenerateOutcome:
    """Result of a generation run."""

    path: Path
    text: str
    written: bool


class Orchestrator:
    """Coordinates snapshot loading, override setup, emission and output."""

    def __init__(self, extra_overrides: Optional[Iterable[ExtraOverride]] = None) -> None:
        self.logger = get_logger("orchestrator")
        self._extra_overrides = list(extra_overrides or [])

    def run_generate(
        self,
        snapshot_path: str | Path,
        *,
        config_path: str | Path | None = None,
        output: str | Path | None = None,
        dry_run: bool = False,
    ) -> GenerateOutcome:
        """Generate the declaration document for a snapshot on disk."""
        snapshot_file = Path(snapshot_path).expanduser().resolve()
        self.logger.info("Starting generation for %s", snapshot_file)

        config = load_config(Path(config_path) if config_path else snapshot_file.parent)
        snapshot = load_snapshot(snapshot_file)
        target = Path(output).expanduser().resolve() if output else config.output.path

        text = self.render(snapshot, config)
        if dry_run:
            self.logger.info("Dry-run completed; %s not written", target)
            return GenerateOutcome(path=target, text=text, written=False)

        atomic_write(target, text)
        self.logger.info("Declarations written to %s", target)
        return GenerateOutcome(path=target, text=text, written=True)

    def render(self, snapshot: Snapshot, config: EventDeclConfig) -> str:
        """Render the full document for an in-memory snapshot."""
        formatter = TypeFormatter(snapshot.graph, namespace=config.emit.namespace)
        overrides = self.build_overrides(snapshot, config, formatter)
        emitter = DeclarationEmitter(
            snapshot.graph,
            overrides,
            formatter=formatter,
            indent=config.emit.indent,
            default_extra_type=config.emit.default_extra_type,
        )
        blocks = emitter.emit(snapshot.groups)
        self.logger.debug(
            "Emitted %d groups (%d overrides active)", len(blocks), len(overrides)
        )
        return render_document(config.output.references, blocks)

    def build_overrides(
        self, snapshot: Snapshot, config: EventDeclConfig, formatter: TypeFormatter
    ) -> OverrideRegistry:
        """Populate and freeze the override registry for one run."""
        registry = OverrideRegistry()
        for group, member, generator in self._extra_overrides:
            registry.register(group, member, generator)
        install_builtin_overrides(registry, snapshot, config, formatter)
        return registry.freeze()


__all__ = ["GenerateOutcome", "Orchestrator"]
