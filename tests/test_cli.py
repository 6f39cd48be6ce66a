"""Tests for the headless runner."""

import pytest
from life2.cli import main, build_parser
from life2.rules.team_rules import RULE_FACTORIES


class TestParser:
    """Test argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.board == 'rectangular'
        assert args.rules == list(RULE_FACTORIES)
        assert args.evaluate_empty is False

    def test_rule_list(self):
        args = build_parser().parse_args(['--rules', 'birth, loneliness'])
        assert args.rules == ['birth', 'loneliness']

    def test_unknown_rule_kind(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(['--rules', 'loneliness,gravity'])
        assert excinfo.value.code == 2
        assert "gravity" in capsys.readouterr().err

    def test_repeated_rule_kind(self, capsys):
        """Listing a rule kind twice is a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(['--rules', 'loneliness,birth,loneliness'])
        assert excinfo.value.code == 2
        assert "duplicate rule kind(s): loneliness" in capsys.readouterr().err


class TestMain:
    """Test full runs."""

    def test_run_reports_stats(self, capsys):
        code = main(['--width', '10', '--height', '8', '--generations', '3', '--seed', '1'])
        out = capsys.readouterr().out

        assert code == 0
        assert "generations: 3" in out
        assert "population: team_a=" in out
        assert "births: team_a=" in out
        assert "deaths: team_a=" in out

    def test_same_seed_same_result(self, capsys):
        argv = ['--width', '12', '--height', '12', '--generations', '5',
                '--seed', '42', '--evaluate-empty', '--show']
        main(argv)
        first = capsys.readouterr().out
        main(argv)
        second = capsys.readouterr().out
        assert first == second

    def test_hexagonal_show(self, capsys):
        main(['--board', 'hexagonal', '--width', '4', '--height', '3',
              '--generations', '1', '--seed', '0', '--show'])
        lines = capsys.readouterr().out.splitlines()
        board_rows = lines[-3:]
        assert board_rows[1].startswith(' ')
        assert all(len(row.strip()) == 4 for row in board_rows)

    def test_zero_generations(self, capsys):
        assert main(['--width', '5', '--height', '5', '--generations', '0', '--seed', '3']) == 0
        assert "generations: 0" in capsys.readouterr().out

    def test_invalid_dimensions(self):
        with pytest.raises(SystemExit) as excinfo:
            main(['--width', '0'])
        assert excinfo.value.code == 2

    def test_negative_threshold(self):
        with pytest.raises(SystemExit) as excinfo:
            main(['--loneliness', '-2'])
        assert excinfo.value.code == 2

    def test_negative_generations(self):
        with pytest.raises(SystemExit):
            main(['--generations', '-1'])

    def test_repeated_rule_kind_exits_cleanly(self):
        with pytest.raises(SystemExit) as excinfo:
            main(['--rules', 'loneliness,loneliness', '--width', '4', '--height', '4',
                  '--generations', '1'])
        assert excinfo.value.code == 2

    @pytest.mark.parametrize("density", ['5', '-0.1', '1.01'])
    def test_density_out_of_range(self, density, capsys):
        """Densities outside 0..1 are rejected instead of clamped."""
        with pytest.raises(SystemExit) as excinfo:
            main(['--density', density, '--width', '4', '--height', '4'])
        assert excinfo.value.code == 2
        assert "--density must be between 0 and 1" in capsys.readouterr().err

    @pytest.mark.parametrize("density", ['0', '1'])
    def test_density_bounds_accepted(self, density):
        assert main(['--density', density, '--width', '4', '--height', '4',
                     '--generations', '1', '--seed', '2']) == 0
