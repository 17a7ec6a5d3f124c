"""Tests for jj-hunk command line parsing."""

from pathlib import Path

import pytest

from jj_hunk.cli.arg_parser import parse_args


class TestListArgs:
    """Tests for the list subcommand."""

    def test_defaults_left_unset(self) -> None:
        """Unset flags stay None so config can fill them."""
        args = parse_args(["list"])

        assert args.command == "list"
        assert args.rev is None
        assert args.format is None
        assert args.group is None
        assert args.binary is None
        assert args.max_bytes is None
        assert args.include == []
        assert not args.files
        assert not args.spec_template

    def test_all_flags(self) -> None:
        args = parse_args([
            "list", "-r", "@-", "-i", "src/**", "--include", "*.md",
            "-x", "gen/**", "--group", "extension", "--format", "text",
            "--binary", "include", "--max-bytes", "100", "--max-lines", "5",
            "--files",
        ])

        assert args.rev == "@-"
        assert args.include == ["src/**", "*.md"]
        assert args.exclude == ["gen/**"]
        assert args.group == "extension"
        assert args.format == "text"
        assert args.binary == "include"
        assert (args.max_bytes, args.max_lines) == (100, 5)
        assert args.files

    def test_files_and_template_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["list", "--files", "--spec-template"])

    def test_invalid_choice(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["list", "--format", "xml"])


class TestSelectionCommandArgs:
    """Tests for select, split, commit and squash."""

    def test_select_paths(self) -> None:
        args = parse_args(["select", "/tmp/left", "/tmp/right", "--dry-run"])

        assert args.left == Path("/tmp/left")
        assert args.right == Path("/tmp/right")
        assert args.dry_run

    def test_split_positionals(self) -> None:
        args = parse_args(["split", '{"default": "keep"}', "msg", "-r", "abc"])

        assert args.spec == '{"default": "keep"}'
        assert args.message == "msg"
        assert args.rev == "abc"

    def test_commit_with_spec_file(self) -> None:
        args = parse_args(["commit", "-f", "spec.yaml", "msg"])

        assert args.spec_file == "spec.yaml"
        assert args.spec == "msg"
        assert args.message is None

    def test_squash_has_no_message(self) -> None:
        args = parse_args(["squash", "-"])

        assert args.spec == "-"
        assert not hasattr(args, "message")

    def test_global_flags(self) -> None:
        args = parse_args(["-v", "--config", "c.json", "squash", "{}"])

        assert args.verbose
        assert args.config == Path("c.json")

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            parse_args([])
