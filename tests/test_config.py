"""Tests for config file loading, validation and CLI merging."""

from argparse import Namespace
from pathlib import Path

import pytest

from complexeval.cli.config import load_config, merge_config_with_args, validate_config


def _coloc_args(**overrides):
    values = dict(
        command="coloc", input=None, loc=None, output=None,
        outtype=0, ppv=False, nomiss=False, nonweighted=False,
    )
    values.update(overrides)
    return Namespace(**values)


class TestLoadConfig:

    def test_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("coloc:\n  score: ppv\n  outtype: 1\n")
        assert load_config(path) == {"coloc": {"score": "ppv", "outtype": 1}}

    def test_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"correlate": {"method": "spearman"}}')
        assert load_config(path)["correlate"]["method"] == "spearman"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_config(path) == {}

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "none.yaml")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("x = 1")
        with pytest.raises(ValueError, match="Unsupported config format"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("coloc: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping of settings"):
            load_config(path)


class TestValidateConfig:

    def test_valid(self):
        validate_config({
            "coloc": {"score": "ppv", "outtype": 2, "weighted": True},
            "correlate": {"method": "pearson"},
        })

    @pytest.mark.parametrize("config,match", [
        ({"coloc": {"score": "jaccard"}}, "score type"),
        ({"coloc": {"outtype": 5}}, "Output type"),
        ({"coloc": {"weighted": "yes"}}, "true or false"),
        ({"correlate": {"method": "kendall"}}, "correlation method"),
    ])
    def test_invalid(self, config, match):
        with pytest.raises(ValueError, match=match):
            validate_config(config)


class TestMergeConfigWithArgs:

    def test_config_fills_defaults(self):
        config = {
            "complexes": "c.txt",
            "localization": "l.txt",
            "coloc": {"score": "ppv", "weighted": False, "ignore_missing": True, "outtype": 1},
        }
        merged = merge_config_with_args(config, _coloc_args())
        assert merged.input == Path("c.txt")
        assert merged.loc == Path("l.txt")
        assert merged.ppv is True
        assert merged.nonweighted is True
        assert merged.nomiss is True
        assert merged.outtype == 1

    def test_explicit_cli_wins(self):
        config = {"complexes": "c.txt", "coloc": {"outtype": 1}}
        args = _coloc_args(input=Path("mine.txt"), outtype=2)
        merged = merge_config_with_args(config, args, ["coloc", "-i", "mine.txt", "--outtype", "2"])
        assert merged.input == Path("mine.txt")
        assert merged.outtype == 2

    def test_does_not_mutate_args(self):
        args = _coloc_args()
        merge_config_with_args({"coloc": {"outtype": 1}}, args)
        assert args.outtype == 0

    def test_correlate_section(self):
        args = Namespace(command="correlate", input=None, x=None, y=None,
                         method="pearson", sep="\t", output=None)
        config = {
            "complexes": "ignored.txt",
            "correlate": {"input": "scores.csv", "x": "a", "y": "b", "method": "spearman", "sep": ","},
        }
        merged = merge_config_with_args(config, args)
        assert merged.input == Path("scores.csv")
        assert (merged.x, merged.y, merged.method, merged.sep) == ("a", "b", "spearman", ",")
