import numpy as np
import pandas as pd
import pytest

from hapmatch.errors import InvalidInput
from hapmatch.io_.matrix import load_haplotypes, save_haplotypes
from hapmatch.io_.tables import (
    ARRAY_COLUMNS,
    MATCH_COLUMNS,
    arrays_to_frame,
    matches_to_frame,
    write_arrays,
    write_matches,
)
from hapmatch.pbwt.matches import Match


def test_load_text_matrix(tmp_path):
    path = tmp_path / "haps.txt"
    path.write_text("# sites x haplotypes\n0 1 1 0\n1 1 0 0\n", encoding="utf-8")

    haps = load_haplotypes(path)

    assert haps.dtype == np.uint8
    assert haps.tolist() == [[0, 1, 1, 0], [1, 1, 0, 0]]


def test_load_single_row_text_matrix(tmp_path):
    path = tmp_path / "haps.txt"
    path.write_text("0 1 1\n", encoding="utf-8")

    assert load_haplotypes(path).shape == (1, 3)


def test_load_npy_matrix(tmp_path, durbin_haps):
    path = tmp_path / "haps.npy"
    np.save(path, durbin_haps.astype(np.int64))

    np.testing.assert_array_equal(load_haplotypes(path, "npy"), durbin_haps)


def test_save_and_load_text(tmp_path, durbin_haps):
    path = tmp_path / "haps.txt"
    save_haplotypes(path, durbin_haps)

    np.testing.assert_array_equal(load_haplotypes(path), durbin_haps)


def test_load_rejects_non_binary(tmp_path):
    path = tmp_path / "haps.txt"
    path.write_text("0 1 2\n1 1 0\n", encoding="utf-8")

    with pytest.raises(InvalidInput):
        load_haplotypes(path)


def test_load_rejects_unknown_format(tmp_path):
    with pytest.raises(InvalidInput):
        load_haplotypes(tmp_path / "haps.bin", "bin")


def test_matches_to_frame_and_write(tmp_path):
    matches = [
        Match(haplo_a=(0, 7), haplo_b=(3,), end=4),
        Match(haplo_a=(), haplo_b=(1, 6), end=4),
    ]
    df = matches_to_frame(matches)

    assert df.columns.tolist() == MATCH_COLUMNS
    assert df["n_haplo_a"].tolist() == [2, 0]
    assert df["haplo_b"].tolist() == ["3", "1,6"]

    out = tmp_path / "matches.tsv"
    write_matches(out, df)
    back = pd.read_csv(out, sep="\t", dtype=str, keep_default_na=False)
    assert back.columns.tolist() == MATCH_COLUMNS
    assert back["haplo_a"].tolist() == ["0,7", ""]


def test_empty_matches_frame_keeps_columns():
    df = matches_to_frame([])
    assert df.empty
    assert df.columns.tolist() == MATCH_COLUMNS


def test_write_matches_requires_columns(tmp_path):
    with pytest.raises(ValueError):
        write_matches(tmp_path / "bad.tsv", pd.DataFrame({"end": [1]}))


def test_arrays_frame(tmp_path):
    df = arrays_to_frame(np.array([2, 0, 1]), np.array([3, 3, 0]))
    assert df.columns.tolist() == ARRAY_COLUMNS
    assert df["prefix"].tolist() == [2, 0, 1]

    out = tmp_path / "arrays.tsv"
    write_arrays(out, df)
    assert pd.read_csv(out, sep="\t")["divergence"].tolist() == [3, 3, 0]

    with pytest.raises(ValueError):
        arrays_to_frame(np.array([0, 1]), np.array([0]))


VCF_HEADER = (
    "##fileformat=VCFv4.2\n"
    "##contig=<ID=1,length=10000>\n"
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">\n'
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\ts1\ts2\n"
)


def test_load_vcf_haplotypes(tmp_path):
    pytest.importorskip("cyvcf2")
    from hapmatch.io_.vcf import load_vcf_haplotypes

    path = tmp_path / "phased.vcf"
    path.write_text(
        VCF_HEADER
        + "1\t100\t.\tA\tG\t.\tPASS\t.\tGT\t0|1\t1|1\n"
        + "1\t250\t.\tC\tT\t.\tPASS\t.\tGT\t0|0\t1|0\n",
        encoding="utf-8",
    )

    loaded = load_vcf_haplotypes(str(path))

    assert loaded.samples == ["s1", "s2"]
    assert loaded.positions.tolist() == [100, 250]
    assert loaded.haps.tolist() == [[0, 1, 1, 1], [0, 0, 1, 0]]


def test_load_vcf_rejects_unphased(tmp_path):
    pytest.importorskip("cyvcf2")
    from hapmatch.io_.vcf import load_vcf_haplotypes

    path = tmp_path / "unphased.vcf"
    path.write_text(VCF_HEADER + "1\t100\t.\tA\tG\t.\tPASS\t.\tGT\t0/1\t1|1\n", encoding="utf-8")

    with pytest.raises(InvalidInput):
        load_vcf_haplotypes(str(path))
