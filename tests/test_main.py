import pytest

from py_unitconv.__main__ import main

PRESSURE_OVERRIDE = """
[pyuc]
precision = 1
"""


@pytest.fixture(autouse=True)
def restore_defaults(default_api):
    yield


class TestMain:

    def test_convert(self, capsys):
        assert main(["5 pounds", "oz"]) == 0
        assert capsys.readouterr().out == "80.00 oz\n"

    def test_composite(self, capsys):
        assert main(["5' 2\"", "m"]) == 0
        assert capsys.readouterr().out == "1.57 m\n"

    def test_undefined_conversion(self, capsys):
        assert main(["5 kg", "m"]) == 1
        assert capsys.readouterr().out == "undefined conversion\n"

    def test_undefined_origin(self, capsys):
        assert main(["5 alien", "g"]) == 1
        assert capsys.readouterr().out == "undefined origin\n"

    def test_format_options(self, capsys):
        assert main(["-p", "3", "5 pounds", "oz"]) == 0
        assert capsys.readouterr().out == "80.000 oz\n"
        assert main(["--exact", "25C", "F"]) == 0
        assert capsys.readouterr().out == "77 F\n"

    def test_config(self, capsys, tmp_path):
        path = tmp_path / 'pyuc.toml'
        path.write_text(PRESSURE_OVERRIDE, encoding='utf-8')
        assert main(["-c", str(path), "1 atm", "kPa"]) == 0
        assert capsys.readouterr().out == "101.3 kPa\n"

    def test_bad_config(self, tmp_path):
        path = tmp_path / 'pyuc.toml'
        path.write_text('[pyuc]\nprecision = "two"\n', encoding='utf-8')
        assert main(["-c", str(path), "1 atm", "kPa"]) == 2
        assert main(["-c", str(tmp_path / 'absent.toml'), "1 atm", "kPa"]) == 2

    def test_missing_arguments(self, capsys):
        assert main(["5 kg"]) == 2
        assert "usage" in capsys.readouterr().err

    def test_list(self, capsys):
        assert main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "mass: mg, g, kg, t, oz, lb, st, lb_oz" in out
        assert out.splitlines()[0].startswith("length:")

    def test_kind(self, capsys):
        assert main(["-k", "pounds"]) == 0
        assert capsys.readouterr().out == "mass\n"
        assert main(["--kind", "alien"]) == 1
        assert capsys.readouterr().out == "unknown unit alien\n"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert capsys.readouterr().out.startswith("pyuc v")
