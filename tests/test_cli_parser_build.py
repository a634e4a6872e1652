import pytest

import tuiman
from core.interface import tuiman_app


def test_build_parser_has_core_commands():
    parser = tuiman.build_parser()
    help_text = parser.format_help()
    for command in ("tui", "list", "history", "export", "import"):
        assert command in help_text


def test_loader_exposes_interface_module():
    assert tuiman.main is tuiman_app.main


def test_subcommand_arguments():
    parser = tuiman_app.build_parser()
    args = parser.parse_args(["history", "--limit", "5"])
    assert args.limit == 5
    assert args.func is tuiman_app.cmd_history
    assert parser.parse_args(["tui", "--theme", "dark-contrast"]).theme == "dark-contrast"
    assert parser.parse_args(["export"]).directory is None
    assert parser.parse_args(["list", "--filter", "users"]).filter == "users"


def test_invalid_theme_and_missing_import_dir_exit():
    parser = tuiman_app.build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["tui", "--theme", "nope"])
    with pytest.raises(SystemExit):
        parser.parse_args(["import"])
