import dataclasses

import pytest

from hrbench.config import DEFAULT_OPTIONS, HistogramOptions, load_options


def test_defaults():
    assert DEFAULT_OPTIONS.bin_count == 10
    assert DEFAULT_OPTIONS.nice_range is True
    assert DEFAULT_OPTIONS.clamp_maximum == 0
    assert DEFAULT_OPTIONS.clamp_percentile == 99.9


def test_replace_does_not_touch_defaults():
    opts = DEFAULT_OPTIONS.replace(bin_count=3, clamp_percentile=0)
    assert opts.bin_count == 3
    assert DEFAULT_OPTIONS.bin_count == 10
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_OPTIONS.bin_count = 4  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"bin_count": 0},
        {"clamp_maximum": -1},
        {"clamp_percentile": 100},
        {"clamp_percentile": -0.5},
    ],
)
def test_invalid_options(kwargs):
    with pytest.raises(ValueError):
        HistogramOptions(**kwargs)


def test_round_trip_dict():
    opts = HistogramOptions(bin_count=20, clamp_maximum=1e6)
    assert HistogramOptions.from_dict(opts.to_dict()) == opts


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError, match="bins"):
        HistogramOptions.from_dict({"bins": 3})


def test_load_options_flat(tmp_path):
    path = tmp_path / "opts.yaml"
    path.write_text("bin_count: 25\nclamp_percentile: 99\n", encoding="utf-8")
    opts = load_options(path)
    assert opts.bin_count == 25
    assert opts.clamp_percentile == 99
    assert opts.nice_range is True


def test_load_options_nested(tmp_path):
    path = tmp_path / "opts.yaml"
    path.write_text("histogram:\n  nice_range: false\n", encoding="utf-8")
    assert load_options(path) == HistogramOptions(nice_range=False)


def test_load_options_empty_file(tmp_path):
    path = tmp_path / "opts.yaml"
    path.write_text("", encoding="utf-8")
    assert load_options(path) == DEFAULT_OPTIONS


def test_load_options_requires_mapping(tmp_path):
    path = tmp_path / "opts.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_options(path)


def test_load_options_converts_yaml_scalars(tmp_path):
    # PyYAML reads ``1e6`` (no dot) as a string.
    path = tmp_path / "opts.yaml"
    path.write_text("clamp_maximum: 1e6\nbin_count: 12\n", encoding="utf-8")
    opts = load_options(path)
    assert opts.clamp_maximum == 1_000_000.0
    assert isinstance(opts.clamp_maximum, float)
    assert opts.bin_count == 12


@pytest.mark.parametrize(
    "text",
    [
        'bin_count: "ten"\n',
        "bin_count: true\n",
        "bin_count: 2.5\n",
        "clamp_maximum: lots\n",
        "clamp_percentile: [1, 2]\n",
        "nice_range: 1\n",
    ],
)
def test_load_options_bad_types(tmp_path, text):
    path = tmp_path / "opts.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_options(path)


def test_load_options_rejects_keys_beside_histogram(tmp_path):
    path = tmp_path / "opts.yaml"
    path.write_text("histogram:\n  bin_count: 5\nbins: 3\n", encoding="utf-8")
    with pytest.raises(ValueError, match="bins"):
        load_options(path)


def test_load_options_histogram_must_be_mapping(tmp_path):
    path = tmp_path / "opts.yaml"
    path.write_text("histogram: [5]\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_options(path)
