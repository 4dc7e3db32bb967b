"""
Headless CLI Tests
"""

import pandas as pd
import yaml

import pwr_sim


class TestCli:
    """Command line entry point"""

    def test_no_command_prints_help(self, capsys):
        assert pwr_sim.main([]) == 1

    def test_run_with_trip_and_export(self, tmp_path):
        csv_path = tmp_path / "trend.csv"
        exit_code = pwr_sim.main([
            "run", "--duration", "1", "--seed", "3", "--scram-at", "0.5", "--csv", str(csv_path),
        ])
        assert exit_code == 0
        frame = pd.read_csv(csv_path)
        assert len(frame) == 10
        assert frame["rod_position"].iloc[-1] < 225

    def test_run_with_rod_step(self, tmp_path):
        csv_path = tmp_path / "trend.csv"
        assert pwr_sim.main(["run", "--duration", "0.5", "--rod-step", "-20", "--csv", str(csv_path)]) == 0
        frame = pd.read_csv(csv_path)
        assert (frame["rod_position"] == 205).all()

    def test_build_simulator_overrides(self):
        sim = pwr_sim.build_simulator(None, frame_rate=30, seed=5)
        assert sim.config.frame_rate == 30
        assert sim.config.seed == 5

    def test_show_config(self, capsys):
        assert pwr_sim.main(["show-config"]) == 0
        output = capsys.readouterr().out
        assert "rod_worth" in output
        assert "frame_rate" in output

    def test_invalid_config_reports_error(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"physics": {"temp_coeff": 0.01}}))
        assert pwr_sim.main(["show-config", "--config", str(path)]) == 1
        assert "temp_coeff" in capsys.readouterr().out

    def test_verbose_after_subcommand(self):
        assert pwr_sim.main(["run", "--duration", "0.1", "--verbose"]) == 0

    def test_verbose_in_either_position(self):
        parser = pwr_sim.build_parser()
        assert parser.parse_args(["-v", "run"]).verbose
        assert parser.parse_args(["run", "-v"]).verbose
        assert parser.parse_args(["show-config", "--verbose"]).verbose
        assert not parser.parse_args(["run"]).verbose
