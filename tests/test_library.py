"""
Tests for motif library parsing, filtering and retrieval.
"""

import io
import logging
import urllib.error
from unittest.mock import patch

import pytest

from elmasker.core.models import LogicLabel
from elmasker.motifs.fetch import LibrarySource, fetch_text, load_library
from elmasker.motifs.library import LibraryError, LibraryUnavailableError, MotifLibrary

from .sample_data import CLASS_COLUMNS, CLASSES_TSV, INSTANCE_COLUMNS, PROTEIN_SEQUENCES, to_elm_tsv


class TestParsing:
    """Tests for MotifLibrary.from_tsv()."""

    def test_valid_classes_loaded(self, library):
        assert len(library) == 3
        assert "LIG_TEST_AVL" in library
        assert "MOD_TEST_PK" in library
        assert "DOC_TEST_ST" in library

    def test_malformed_classes_skipped(self, classes_tsv, caplog):
        with caplog.at_level(logging.WARNING):
            library = MotifLibrary.from_tsv(classes_tsv)
        assert "DEG_TEST_BAD" not in library
        assert "DOC_TEST_NOPROB" not in library
        assert caplog.text.count("skipped") >= 2

    def test_class_fields(self, library):
        motif = library["LIG_TEST_AVL"]
        assert motif.accession == "ELME000001"
        assert motif.category == "LIG"
        assert motif.pattern == "AVL"
        assert motif.probability == pytest.approx(0.0005)
        assert motif.description == "Ligand motif matching AVL"

    def test_versions_recorded(self, library):
        assert library.classes_version == "1.4"
        assert library.instances_version == "1.4"

    def test_instances_attached(self, library):
        instances = library["LIG_TEST_AVL"].instances
        assert [i.accession for i in instances] == ["ELMI000001", "ELMI000002"]
        assert instances[0].logic == LogicLabel.FALSE_POSITIVE
        assert instances[1].logic == LogicLabel.TRUE_POSITIVE

    def test_instance_residues_from_protein_sequences(self, library):
        first, second = library["LIG_TEST_AVL"].instances
        assert first.sequence == "AVL"
        assert second.sequence == "AVL"

    def test_instance_residues_from_sequence_column(self):
        instances = to_elm_tsv(
            [],
            INSTANCE_COLUMNS + ["Sequence"],
            [["ELMI9", "LIG", "LIG_TEST_AVL", "P9_HUMAN", "P9", "P9", "5", "7",
              "", "", "False positive", "", "Homo sapiens", "avl"]],
        )
        library = MotifLibrary.from_tsv(CLASSES_TSV, instances)
        (instance,) = library["LIG_TEST_AVL"].instances
        assert instance.sequence == "AVL"
        assert instance.logic == LogicLabel.FALSE_POSITIVE

    def test_instances_without_residues_kept_empty(self, classes_tsv, instances_tsv):
        library = MotifLibrary.from_tsv(classes_tsv, instances_tsv)
        assert all(i.sequence == "" for i in library.instances())
        assert library["LIG_TEST_AVL"].instance_sequences(LogicLabel.FALSE_POSITIVE) == set()

    def test_bad_and_orphan_instances_skipped(self, library):
        assert len(list(library.instances())) == 2

    def test_empty_class_table_is_fatal(self):
        with pytest.raises(LibraryError):
            MotifLibrary.from_tsv(to_elm_tsv(["#nothing"], CLASS_COLUMNS, []))

    def test_instance_sequences_by_label(self, library):
        motif = library["LIG_TEST_AVL"]
        assert motif.instance_sequences(LogicLabel.FALSE_POSITIVE) == {"AVL"}
        assert motif.instance_sequences(LogicLabel.TRUE_NEGATIVE) == set()


class TestFiltering:
    """Category and probability restrictions."""

    def test_categories(self, library):
        assert library.categories() == {"DOC": 1, "LIG": 1, "MOD": 1}

    def test_include_categories(self, library):
        ligands = library.filter_categories(include=["lig"])
        assert [m.identifier for m in ligands] == ["LIG_TEST_AVL"]

    def test_exclude_categories(self, library):
        rest = library.filter_categories(exclude=["LIG", "MOD"])
        assert [m.identifier for m in rest] == ["DOC_TEST_ST"]

    def test_filter_returns_new_library(self, library):
        filtered = library.filter_categories(include=["MOD"])
        assert len(library) == 3
        assert len(filtered) == 1
        assert filtered.classes_version == library.classes_version

    def test_probability_ceiling(self, library):
        rare = library.filter_probability(0.001)
        assert [m.identifier for m in rare] == ["LIG_TEST_AVL"]

    def test_iteration_order_follows_table(self, library):
        assert [m.identifier for m in library] == ["LIG_TEST_AVL", "MOD_TEST_PK", "DOC_TEST_ST"]


class _FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class TestFetch:
    """Tests for HTTP retrieval and caching."""

    def test_download_is_cached(self, tmp_path):
        source = LibrarySource(cache_dir=tmp_path / "cache")
        with patch("urllib.request.urlopen", return_value=_FakeResponse(b"payload")) as urlopen:
            assert fetch_text("http://example.org/a.tsv", source) == "payload"
            assert fetch_text("http://example.org/a.tsv", source) == "payload"
        assert urlopen.call_count == 1

    def test_cache_disabled(self, tmp_path):
        source = LibrarySource(use_cache=False, cache_dir=tmp_path / "cache")
        with patch(
            "urllib.request.urlopen",
            side_effect=lambda *a, **k: _FakeResponse(b"payload"),
        ) as urlopen:
            fetch_text("http://example.org/a.tsv", source)
            fetch_text("http://example.org/a.tsv", source)
        assert urlopen.call_count == 2

    def test_network_failure_is_fatal(self, tmp_path):
        source = LibrarySource(cache_dir=tmp_path / "cache")
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
            with pytest.raises(LibraryUnavailableError, match="example.org"):
                fetch_text("http://example.org/a.tsv", source)

    def test_load_from_local_files(self, library_files):
        classes_path, instances_path = library_files
        library = load_library(classes_path=classes_path, instances_path=instances_path)
        assert len(library) == 3
        assert len(list(library.instances())) == 2

    def test_load_from_network(self, tmp_path):
        source = LibrarySource(cache_dir=tmp_path / "cache", instances_url=None)
        with patch("urllib.request.urlopen", return_value=_FakeResponse(CLASSES_TSV.encode())):
            library = load_library(source)
        assert "LIG_TEST_AVL" in library

    def test_missing_local_file_is_fatal(self, tmp_path):
        with pytest.raises(LibraryUnavailableError, match="missing.tsv"):
            load_library(classes_path=tmp_path / "missing.tsv", instances_path=tmp_path / "x")

    def test_malformed_library_names_source(self, tmp_path):
        bad = tmp_path / "bad.tsv"
        bad.write_text("not an elm table\n")
        with pytest.raises(LibraryUnavailableError, match="bad.tsv"):
            load_library(LibrarySource(instances_url=None), classes_path=bad)

    def test_load_fills_instance_residues(self, library_files):
        classes_path, instances_path = library_files
        library = load_library(
            classes_path=classes_path,
            instances_path=instances_path,
            protein_sequences=PROTEIN_SEQUENCES,
        )
        assert library["LIG_TEST_AVL"].instance_sequences(LogicLabel.FALSE_POSITIVE) == {"AVL"}

    def test_unusable_cache_is_fatal(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        source = LibrarySource(cache_dir=blocker / "cache")
        with patch("urllib.request.urlopen") as urlopen:
            with pytest.raises(LibraryUnavailableError, match="example.org"):
                fetch_text("http://example.org/a.tsv", source)
        urlopen.assert_not_called()
