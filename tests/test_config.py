import pytest

from hapmatch.config import PBWTConfig, RunConfig, load_yaml_config, to_dict
from hapmatch.errors import InvalidInput


def test_defaults():
    cfg = RunConfig()
    assert cfg.pbwt == PBWTConfig(min_size=3, k_site=None, biallelic_only=False)
    assert cfg.input.format == "txt"
    assert cfg.output.matches == "matches.tsv"
    assert to_dict(cfg)["pbwt"]["min_size"] == 3


def test_load_yaml_merges_over_defaults(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text(
        "pbwt:\n  min_size: 5\n  unknown_key: 1\ninput:\n  path: haps.npy\n  format: npy\n",
        encoding="utf-8",
    )

    cfg = load_yaml_config(path)

    assert cfg.pbwt.min_size == 5
    assert cfg.pbwt.k_site is None
    assert cfg.input.path == "haps.npy"
    assert cfg.input.format == "npy"
    assert cfg.output.arrays is None


def test_load_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_yaml_config(path) == RunConfig()


@pytest.mark.parametrize(
    "body",
    [
        "pbwt:\n  min_size: 0\n",
        "pbwt:\n  min_size: \"3\"\n",
        "pbwt:\n  min_size: true\n",
        "pbwt:\n  k_site: 0\n",
        "pbwt:\n  k_site: 2.5\n",
        "pbwt:\n  biallelic_only: \"yes\"\n",
        "input:\n  format: bcf\n",
    ],
)
def test_load_yaml_rejects_bad_values(tmp_path, body):
    path = tmp_path / "bad.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(InvalidInput):
        load_yaml_config(path)
