from __future__ import annotations

import json

import pytest

from dirconf.cli.main import main


@pytest.fixture
def system(tmp_path):
    path = tmp_path / "dev.json"
    path.write_text(
        json.dumps(
            {
                "name": "dev",
                "packages": {"appserver": {"version": "4.3.1", "installed_at": "2024-01-01"}},
                "properties": {"db.host": "db01"},
            }
        )
    )
    return path


def write_ccm(tmp_path, pattern, tested="OK"):
    path = tmp_path / "base.ccm"
    path.write_text(
        f'<ccm><package name="appserver"><version version="{pattern}" tested="{tested}"/>'
        "</package></ccm>"
    )
    return path


def test_check_ok(tmp_path, system, capsys):
    ccm = write_ccm(tmp_path, "4\\.3\\..*")
    assert main(["check", "-t", str(system), str(ccm)]) == 0
    assert "OK" in capsys.readouterr().out


def test_check_failure_exit_code(tmp_path, system, capsys):
    ccm = write_ccm(tmp_path, "4\\.2\\..*")
    assert main(["check", "-t", str(system), str(ccm)]) == 1
    captured = capsys.readouterr()
    assert "FAILED" in captured.out
    assert "not mentioned in the known versions" in captured.err


def test_check_bad_declaration(tmp_path, system, capsys):
    ccm = tmp_path / "bad.ccm"
    ccm.write_text("<ccm><frobnicate/></ccm>")
    assert main(["check", "-t", str(system), str(ccm)]) == 1
    assert "frobnicate" in capsys.readouterr().err


def test_list(system, capsys):
    assert main(["list", "-t", str(system)]) == 0
    assert capsys.readouterr().out.strip() == "appserver 4.3.1 2024-01-01"


def test_render(tmp_path, capsys):
    (tmp_path / "part.ctf").write_text("${who} costs ${dollar}${price}")
    props = tmp_path / "vars.properties"
    props.write_text("who=tea\nprice=1\n")
    tpl = tmp_path / "main.tpl"
    tpl.write_text("${include:file=part.ctf}\n")
    assert main(["render", str(tpl), "-p", str(props), "-D", "price=2"]) == 0
    assert capsys.readouterr().out == "tea costs $2\n"


def test_render_to_file(tmp_path):
    tpl = tmp_path / "main.tpl"
    tpl.write_text("v=${v}")
    out = tmp_path / "out.txt"
    assert main(["render", str(tpl), "-D", "v=1", "-o", str(out)]) == 0
    assert out.read_text() == "v=1"


def test_render_structural_error(tmp_path, capsys):
    tpl = tmp_path / "main.tpl"
    tpl.write_text("${include:file=gone.ctf}")
    assert main(["render", str(tpl)]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_configure_and_purge(tmp_path, system):
    (tmp_path / "web.ctf").write_text("db=${db.host}")
    ccm = tmp_path / "web.ccm"
    ccm.write_text('<ccm><template name="web" source="web.ctf" dest="conf/web.txt"/></ccm>')
    dest = tmp_path / "conf" / "web.txt"

    assert main(["configure", "-t", str(system), "-y", str(ccm)]) == 0
    assert dest.read_text() == "db=db01"
    assert main(["check", "-t", str(system), str(ccm)]) == 0

    assert main(["purge", "-t", str(system), "-y", str(ccm)]) == 0
    assert not dest.exists()


def test_no_command_prints_help(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().out


def test_render_undecodable_include(tmp_path, capsys):
    (tmp_path / "latin.ctf").write_bytes(b"caf\xe9")
    tpl = tmp_path / "main.tpl"
    tpl.write_text("${include:file=latin.ctf}")
    assert main(["render", str(tpl)]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_configure_failure_exit_code(tmp_path, system, capsys):
    (tmp_path / "web.ctf").write_text("db=${db.host}")
    (tmp_path / "blocker").write_text("not a folder")
    ccm = tmp_path / "web.ccm"
    ccm.write_text('<ccm><template name="web" source="web.ctf" dest="blocker/web.txt"/></ccm>')
    assert main(["configure", "-t", str(system), "-y", str(ccm)]) == 1
    assert "Objective failed" in capsys.readouterr().err
