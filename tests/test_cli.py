"""
Tests for nestedset.cli, run in-process through main().
"""

import io
import json

from tests.conftest import CLOTHING_CSV


class TestParser:
    """Tests for create_parser()."""

    def test_global_options_before_command(self):
        from nestedset.cli import create_parser

        args = create_parser().parse_args(["-v", "rebuild", "tree.csv", "--sort"])

        assert args.verbose is True
        assert args.command == "rebuild"
        assert args.sort is True
        assert args.complement is False
        assert args.max_passes is None

    def test_format_options(self):
        from nestedset.cli import create_parser

        args = create_parser().parse_args(["rebuild", "-f", "tsv", "-t", "json"])

        assert args.input is None
        assert args.from_format == "tsv"
        assert args.to_format == "json"

    def test_no_command_prints_help(self, capsys):
        from nestedset.cli import main

        assert main([]) == 0
        assert "nestedset" in capsys.readouterr().out


class TestRebuildCommand:
    """Tests for `nestedset rebuild`."""

    def test_csv_to_stdout(self, clothing_csv, capsys):
        from nestedset.cli import main

        assert main(["rebuild", str(clothing_csv)]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == (
            "pid,classification,classification_label,classification_origin,"
            "classification_parent,parent_id,leaf,lft,rgt,count"
        )
        assert lines[1] == "1,Clothing,Clothing,,,,false,1,22,2"
        assert len(lines) == 12

    def test_json_output(self, shared_branch_csv, capsys):
        from nestedset.cli import main

        assert main(["rebuild", str(shared_branch_csv), "-t", "json"]) == 0

        records = json.loads(capsys.readouterr().out)
        assert [r["classification"] for r in records] == ["1", "2", "3", "X", "X__1", "x1", "x1"]
        copy = records[4]
        assert copy["classification_origin"] == "X"
        assert copy["classification_parent"] == "3"
        assert (copy["lft"], copy["rgt"]) == (9, 12)

    def test_stdin(self, isolated_cwd, monkeypatch, capsys):
        from nestedset.cli import main

        monkeypatch.setattr("sys.stdin", io.StringIO(CLOTHING_CSV))

        assert main(["rebuild", "-f", "csv", "-t", "json"]) == 0
        assert len(json.loads(capsys.readouterr().out)) == 11

    def test_missing_format(self, isolated_cwd, monkeypatch, capsys):
        from nestedset.cli import main

        monkeypatch.setattr("sys.stdin", io.StringIO(CLOTHING_CSV))

        assert main(["rebuild"]) == 1
        assert "missing option --from" in capsys.readouterr().err

    def test_output_file(self, clothing_csv, capsys):
        from nestedset.cli import main

        out = clothing_csv.parent / "out.json"

        assert main(["rebuild", str(clothing_csv), "-o", str(out)]) == 0

        assert f"Wrote 11 nodes to {out}" in capsys.readouterr().err
        records = json.loads(out.read_text(encoding="utf-8"))
        assert records[0]["rgt"] == 22

    def test_quiet_output_file(self, clothing_csv, capsys):
        from nestedset.cli import main

        out = clothing_csv.parent / "out.csv"

        assert main(["-q", "rebuild", str(clothing_csv), "-o", str(out)]) == 0
        assert capsys.readouterr().err == ""
        assert out.exists()

    def test_complement(self, clothing_csv, capsys):
        from nestedset.cli import main

        assert main(["rebuild", str(clothing_csv), "--complement", "-t", "json"]) == 0

        records = json.loads(capsys.readouterr().out)
        assert records[0]["classification"] == "c__Clothing"
        assert (records[0]["lft"], records[0]["rgt"]) == (1, 44)
        assert len(records) == 22

    def test_sort(self, shared_branch_csv, capsys):
        from nestedset.cli import main

        assert main(["rebuild", str(shared_branch_csv), "--sort", "-t", "json"]) == 0

        records = json.loads(capsys.readouterr().out)
        assert [r["classification"] for r in records] == ["1", "2", "X", "x1", "3", "X__1", "x1"]
        assert [r["pid"] for r in records] == list(range(1, 8))

    def test_verbose_reports_progress(self, shared_branch_csv, capsys):
        from nestedset.cli import main

        assert main(["-v", "rebuild", str(shared_branch_csv)]) == 0

        err = capsys.readouterr().err
        assert "Read 6 records (csv)" in err
        assert "Unfolded in 1 pass(es): 6 -> 7 nodes" in err
        assert "Indexed 7 nodes" in err

    def test_multiple_roots(self, isolated_cwd, capsys):
        from nestedset.cli import main

        path = isolated_cwd / "roots.csv"
        path.write_text("id,label,parent\na,A,\nb,B,\n", encoding="utf-8")

        assert main(["rebuild", str(path)]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Multiple nodes without a parent were found: a, b" in captured.err

    def test_max_passes_zero(self, shared_branch_csv, clothing_csv, capsys):
        """An explicit --max-passes 0 overrides the configured limit."""
        from nestedset.cli import main

        assert main(["rebuild", str(shared_branch_csv), "--max-passes", "0"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "still a DAG after 0 unfolding passes" in captured.err

        assert main(["rebuild", str(clothing_csv), "--max-passes", "0"]) == 0

    def test_duplicate_output_names(self, clothing_csv, capsys):
        from nestedset.cli import main

        (clothing_csv.parent / ".nestedset.toml").write_text(
            '[output.fields]\nlft = "bound"\nrgt = "bound"\n'
        )
        out = clothing_csv.parent / "out.csv"

        assert main(["rebuild", str(clothing_csv), "-o", str(out)]) == 1

        assert "both named 'bound'" in capsys.readouterr().err
        assert not out.exists()

    def test_input_not_utf8(self, isolated_cwd, capsys):
        from nestedset.cli import main

        path = isolated_cwd / "latin1.csv"
        path.write_bytes(b"id,label,parent\nr,Caf\xe9,\n")

        assert main(["rebuild", str(path)]) == 1
        assert "Error: CSV input is not valid UTF-8" in capsys.readouterr().err

    def test_missing_input_file(self, isolated_cwd, capsys):
        from nestedset.cli import main

        assert main(["rebuild", "absent.csv"]) == 1
        assert "Error reading input" in capsys.readouterr().err

    def test_config_input_fields(self, isolated_cwd, capsys):
        from nestedset.cli import main

        (isolated_cwd / ".nestedset.toml").write_text(
            '[input.fields]\nid = "code"\nparent = "up"\n\n'
            '[output.fields]\nlft = "left"\nrgt = "right"\n'
        )
        path = isolated_cwd / "tree.csv"
        path.write_text("code,label,up\nr,Root,\na,A,r\n", encoding="utf-8")

        assert main(["rebuild", str(path), "-t", "json"]) == 0

        records = json.loads(capsys.readouterr().out)
        assert [(r["left"], r["right"]) for r in records] == [(1, 4), (2, 3)]

    def test_explicit_config_missing(self, clothing_csv, capsys):
        from nestedset.cli import main

        assert main(["--config", "nope.toml", "rebuild", str(clothing_csv)]) == 1
        assert "config file not found" in capsys.readouterr().err


class TestCheckCommand:
    """Tests for `nestedset check`."""

    def test_tree(self, clothing_csv, capsys):
        from nestedset.cli import main

        assert main(["check", str(clothing_csv)]) == 0

        out = capsys.readouterr().out
        assert "Nodes:  11" in out
        assert "Root:   Clothing" in out
        assert "Shape:  tree" in out

    def test_dag(self, shared_branch_csv, capsys):
        from nestedset.cli import main

        assert main(["check", str(shared_branch_csv)]) == 0

        assert "Shape:  DAG (unfolds to 7 nodes in 1 pass(es))" in capsys.readouterr().out

    def test_json_summary(self, shared_branch_csv, capsys):
        from nestedset.cli import main

        assert main(["check", str(shared_branch_csv), "-j"]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary == {
            "valid": True,
            "nodes": 6,
            "root": "1",
            "dag": True,
            "unfolded_nodes": 7,
            "passes": 1,
        }

    def test_cycle(self, isolated_cwd, capsys):
        from nestedset.cli import main

        path = isolated_cwd / "cycle.csv"
        path.write_text("id,label,parent\nr,R,\na,A,b\nb,B,a\n", encoding="utf-8")

        assert main(["check", str(path), "--json"]) == 1

        summary = json.loads(capsys.readouterr().out)
        assert summary["valid"] is False
        assert summary["error"].startswith("Cycle detected:")

    def test_unknown_parent(self, isolated_cwd, capsys):
        from nestedset.cli import main

        path = isolated_cwd / "orphan.csv"
        path.write_text("id,label,parent\nr,R,\na,A,zz\n", encoding="utf-8")

        assert main(["check", str(path)]) == 1
        assert "Error: Parent node not found: zz" in capsys.readouterr().err


class TestConfigCommand:
    """Tests for `nestedset config`."""

    def test_show_defaults(self, isolated_cwd, capsys):
        import tomlkit

        from nestedset.cli import main
        from nestedset.config import DEFAULT_CONFIG

        assert main(["config", "show"]) == 0

        shown = tomlkit.parse(capsys.readouterr().out).unwrap()
        assert shown == DEFAULT_CONFIG

    def test_show_with_file(self, isolated_cwd, capsys):
        from nestedset.cli import main

        (isolated_cwd / ".nestedset.toml").write_text("[rebuild]\nmax_unfold_passes = 2\n")

        assert main(["config", "show"]) == 0
        assert "max_unfold_passes = 2" in capsys.readouterr().out

    def test_path(self, isolated_cwd, capsys):
        from nestedset.cli import main

        (isolated_cwd / ".nestedset.toml").write_text("")

        assert main(["config", "path"]) == 0
        assert capsys.readouterr().out.strip().endswith(".nestedset.toml")

    def test_path_not_found(self, isolated_cwd, capsys):
        from nestedset.cli import main

        assert main(["config", "path"]) == 1
        assert "No .nestedset.toml found" in capsys.readouterr().err

    def test_no_action(self, capsys):
        from nestedset.cli import main

        assert main(["config"]) == 1
        assert "Usage" in capsys.readouterr().err
