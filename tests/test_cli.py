"""CLI behaviour tests for generate-bindings."""

import json
import textwrap

from bindgen_ts.cli import EXIT_ENTITY_FAILED, EXIT_OK, EXIT_USAGE, _build_parser, main


def _write_module(root, name, source):
    (root / f"{name}.py").write_text(textwrap.dedent(source), encoding="utf-8")


GOOD_SOURCE = """
    from pydantic import BaseModel
    from bindgen_ts import command, entity


    @entity
    class CliNote(BaseModel):
        title: str


    @command
    def cli_greet(name: str):
        return f"Hello, {name}!"


    @command("./overridden")
    def cli_save(note: CliNote):
        return note
"""


def test_parser_accepts_out_and_modules():
    args = _build_parser().parse_args(["app.commands", "app.models", "--out", "./custom"])

    assert args.modules == ["app.commands", "app.models"]
    assert args.out == "./custom"
    assert args.dry_run is False


def test_generates_all_exports(tmp_path, clean_default_exports, capsys, monkeypatch):
    _write_module(tmp_path, "bindgen_sample_good", GOOD_SOURCE)
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "bindings"

    code = main(["bindgen_sample_good", "--out", str(out), "--project-root", str(tmp_path)])

    assert code == EXIT_OK
    assert (out / "CliNote.ts").exists()
    assert (out / "cli_greet.ts").exists()
    assert not (out / "cli_save.ts").exists()
    assert "Generated 3 TypeScript files (0 failed)" in capsys.readouterr().out


def test_entity_directory_overrides_run_directory(tmp_path, clean_default_exports, monkeypatch):
    _write_module(tmp_path, "bindgen_sample_override", GOOD_SOURCE)
    monkeypatch.chdir(tmp_path)

    code = main(["bindgen_sample_override", "--out", "./bindings", "--project-root", str(tmp_path)])

    assert code == EXIT_OK
    saved = (tmp_path / "overridden" / "cli_save.ts").read_text(encoding="utf-8")
    assert "export async function cli_save(note: CliNote)" in saved
    assert 'import type { CliNote } from "../bindings/CliNote";' in saved


def test_failing_entity_does_not_stop_others(tmp_path, clean_default_exports, capsys):
    _write_module(tmp_path, "bindgen_sample_partial", """
        from typing import List
        from bindgen_ts import command


        @command
        def cli_total(values: List[int]):
            return sum(values)


        @command
        def cli_ping():
            return "pong"
    """)
    out = tmp_path / "bindings"

    code = main(["bindgen_sample_partial", "--out", str(out), "--project-root", str(tmp_path)])

    captured = capsys.readouterr()
    assert code == EXIT_ENTITY_FAILED
    assert (out / "cli_ping.ts").exists()
    assert not (out / "cli_total.ts").exists()
    assert "'cli_total'" in captured.err
    assert "'values'" in captured.err


def test_unknown_module_is_usage_error(tmp_path, clean_default_exports, capsys):
    code = main(["bindgen_sample_missing", "--project-root", str(tmp_path)])

    assert code == EXIT_USAGE
    assert "Cannot import module" in capsys.readouterr().err


def test_module_with_syntax_error_is_usage_error(tmp_path, clean_default_exports, capsys):
    _write_module(tmp_path, "bindgen_sample_syntax", "def broken(:\n    pass\n")

    code = main(["bindgen_sample_syntax", "--project-root", str(tmp_path)])

    assert code == EXIT_USAGE
    assert "SyntaxError" in capsys.readouterr().err


def test_module_rejected_by_decorator_is_usage_error(tmp_path, clean_default_exports, capsys):
    _write_module(tmp_path, "bindgen_sample_plain", """
        from bindgen_ts import entity


        @entity
        class Plain:
            x: int
    """)

    code = main(["bindgen_sample_plain", "--project-root", str(tmp_path)])

    err = capsys.readouterr().err
    assert code == EXIT_USAGE
    assert "bindgen_sample_plain" in err
    assert "BaseModel or a dataclass" in err


def test_dry_run_writes_nothing(tmp_path, clean_default_exports, capsys):
    _write_module(tmp_path, "bindgen_sample_dry", GOOD_SOURCE)
    out = tmp_path / "bindings"

    code = main(["bindgen_sample_dry", "--out", str(out), "--project-root", str(tmp_path), "--dry-run"])

    assert code == EXIT_OK
    assert not out.exists()
    assert "would write" in capsys.readouterr().out


def test_config_file_supplies_modules_and_output(tmp_path, clean_default_exports):
    _write_module(tmp_path, "bindgen_sample_config", """
        from bindgen_ts import command


        @command
        def cli_configured(flag: bool):
            return flag
    """)
    out = tmp_path / "from-config"
    (tmp_path / "bindgen.config.json").write_text(json.dumps({
        "output": {"location": str(out)},
        "modules": ["bindgen_sample_config"],
    }))

    code = main(["--project-root", str(tmp_path)])

    assert code == EXIT_OK
    content = (out / "cli_configured.ts").read_text(encoding="utf-8")
    assert "cli_configured(flag: boolean)" in content


def test_fastapi_app_routes_become_commands(tmp_path, clean_default_exports):
    _write_module(tmp_path, "bindgen_sample_api", """
        from fastapi import FastAPI

        app = FastAPI()


        @app.get("/items/{item_id}")
        def read_item(item_id: int, q: str):
            return {"item_id": item_id, "q": q}
    """)
    out = tmp_path / "bindings"

    code = main(["--app", "bindgen_sample_api:app", "--out", str(out), "--project-root", str(tmp_path)])

    assert code == EXIT_OK
    content = (out / "read_item.ts").read_text(encoding="utf-8")
    assert "export async function read_item(item_id: number, q: string)" in content
    assert "invoke('read_item', { item_id, q })" in content


def test_app_path_must_name_a_fastapi_app(tmp_path, clean_default_exports):
    _write_module(tmp_path, "bindgen_sample_notapp", "app = object()\n")

    code = main(["--app", "bindgen_sample_notapp:app", "--project-root", str(tmp_path)])

    assert code == EXIT_USAGE
