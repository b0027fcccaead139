"""CLI parser and command behaviour tests."""

from __future__ import annotations

import pytest

from eventdecl.cli import _build_parser, main
from eventdecl.logging import configure_logging


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate", "snapshot.json"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.snapshot == "snapshot.json"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["classes", "snapshot.json", "--verbose"])
    assert args.verbose is True
    assert args.command == "classes"


def test_cli_accepts_generate_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["generate", "snap.yml", "--config", "conf", "-o", "out.d.ts", "--dry-run"]
    )
    assert args.config == "conf"
    assert args.output == "out.d.ts"
    assert args.dry_run is True


def test_cli_accepts_log_file_option() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--log-file", "run.log", "classes", "snapshot.json"])
    assert args.log_file == "run.log"
    assert _build_parser().parse_args(["classes", "snapshot.json"]).log_file is None


def test_generate_writes_log_file(snapshot_builder, tmp_path, capsys) -> None:
    snapshot_builder.add_class("x.Tick").add_member("ServerEvents", "tick", "x.Tick")
    path = snapshot_builder.write()
    log_path = tmp_path / "eventdecl.log"

    try:
        main(["--log-file", str(log_path), "generate", str(path), "--dry-run"])
    finally:
        configure_logging()

    assert "declare const ServerEvents: {" in capsys.readouterr().out
    logged = log_path.read_text(encoding="utf-8")
    assert "INFO eventdecl.orchestrator: Starting generation for" in logged
    assert "Dry-run completed" in logged


def test_generate_dry_run_prints_document(snapshot_builder, capsys) -> None:
    snapshot_builder.add_class("x.Tick").add_member("ServerEvents", "tick", "x.Tick")
    path = snapshot_builder.write()

    main(["generate", str(path), "--dry-run"])

    out = capsys.readouterr().out
    assert "declare const ServerEvents: {" in out
    assert "tick(handler: (event: Internal.Tick) => void):void," in out


def test_generate_reports_unresolved_class(snapshot_builder, capsys) -> None:
    snapshot_builder.add_member("ServerEvents", "tick", "x.Missing")
    path = snapshot_builder.write()

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(path)])

    assert excinfo.value.code == 1
    assert "ServerEvents.tick" in capsys.readouterr().err


def test_generate_reports_missing_snapshot(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(tmp_path / "absent.json")])

    assert excinfo.value.code == 1
    assert "Snapshot not found" in capsys.readouterr().err


def test_classes_lists_referenced_event_classes(snapshot_builder, capsys) -> None:
    snapshot_builder.add_class("x.Tick")
    snapshot_builder.add_member("ServerEvents", "tick", "x.Tick")
    snapshot_builder.add_member("ServerEvents", "other", "x.Gone")
    snapshot_builder.add_member("ClientEvents", "tick", "x.Tick")

    main(["classes", str(snapshot_builder.write())])

    assert capsys.readouterr().out.splitlines() == ["x.Tick", "x.Gone  (missing from snapshot)"]
