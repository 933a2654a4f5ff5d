from typer.testing import CliRunner

from bus_checker.main import EXIT_NOT_COMPLIANT, EXIT_UNKNOWN_BUS, app


runner = CliRunner()

DC_PASS_ARGS = [
    "check",
    "28vdc",
    "--steady-voltage", "27.8",
    "--ripple", "3",
    "--uv-dip-percent", "10",
    "--uv-dip-duration", "20",
    "--ov-surge-percent", "10",
    "--ov-surge-duration", "20",
]


def test_check_compliant_exits_zero():
    result = runner.invoke(app, DC_PASS_ARGS)
    assert result.exit_code == 0, result.output
    assert "PASS (Demo)" in result.output


def test_check_not_compliant():
    result = runner.invoke(
        app,
        [
            "check",
            "115vac400",
            "--steady-voltage", "113.5",
            "--steady-frequency", "402",
            "--ripple", "4",
            "--uv-dip-percent", "15",
            "--uv-dip-duration", "40",
            "--ov-surge-percent", "25",
            "--ov-surge-duration", "40",
        ],
    )
    assert result.exit_code == EXIT_NOT_COMPLIANT
    assert "NOT COMPLIANT" in result.output


def test_bad_number_is_not_provided():
    args = list(DC_PASS_ARGS)
    args[args.index("27.8")] = "twenty-eight"
    result = runner.invoke(app, args)
    assert result.exit_code == EXIT_NOT_COMPLIANT
    assert "NOT COMPLIANT" in result.output


def test_unknown_bus_type():
    result = runner.invoke(app, ["check", "270vdc", "--steady-voltage", "270"])
    assert result.exit_code == EXIT_UNKNOWN_BUS
    assert "270vdc" in result.output


def test_check_writes_pdf(tmp_path):
    out = tmp_path / "report.pdf"
    result = runner.invoke(app, DC_PASS_ARGS + ["--pdf", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_bytes().startswith(b"%PDF")
    assert (tmp_path / "report.margins.png").exists()


def test_profiles_lists_registry():
    result = runner.invoke(app, ["profiles"])
    assert result.exit_code == 0
    assert "28vdc" in result.output
    assert "115vac400" in result.output
