from simple_books import cli
from simple_books.scenarios import SCENARIOS


def test_list_scenarios(capsys):
    assert cli.main(["run", "--list"]) == 0
    out = capsys.readouterr().out.split()
    assert out == list(SCENARIOS)


def test_run_against_stub(capsys):
    assert cli.main(["--log-level", "WARNING", "run", "--stub"]) == 0
    out = capsys.readouterr().out
    assert "target: http://testserver" in out
    assert f"{len(SCENARIOS)} passed, 0 failed" in out


def test_run_selected_scenarios(capsys):
    assert cli.main(["run", "--stub", "--scenario", "update_order", "--scenario", "delete_order"]) == 0
    out = capsys.readouterr().out
    assert "[PASS] delete_order" in out
    assert "2 passed, 0 failed" in out


def test_unknown_scenario_exit_code(capsys):
    assert cli.main(["run", "--stub", "--scenario", "nope"]) == 2
    assert "unknown scenario" in capsys.readouterr().err
