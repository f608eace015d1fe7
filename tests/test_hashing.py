"""Tests for content fingerprints."""

from pathlib import Path

import pandas as pd

from layoffs_cleaning.config.settings import CleaningConfig, IndustryConfig
from layoffs_cleaning.utils.hashing import hash_config, hash_dataframe, hash_file_content


class TestHashDataframe:
    """Tests for hash_dataframe."""

    def test_index_ignored(self, sample_raw: pd.DataFrame) -> None:
        """Test that relabelling the index keeps the hash."""
        shifted = sample_raw.set_axis(range(10, 10 + len(sample_raw)))
        assert hash_dataframe(shifted) == hash_dataframe(sample_raw)

    def test_value_change_detected(self, sample_raw: pd.DataFrame) -> None:
        """Test that a single changed cell changes the hash."""
        changed = sample_raw.copy()
        changed.loc[0, "country"] = "United States"
        assert hash_dataframe(changed) != hash_dataframe(sample_raw)

    def test_empty_frames_differ_by_columns(self) -> None:
        """Test that empty frames still hash their column names."""
        assert hash_dataframe(pd.DataFrame(columns=["a"])) != hash_dataframe(
            pd.DataFrame(columns=["b"])
        )

    def test_column_subset(self, sample_raw: pd.DataFrame) -> None:
        """Test hashing only some columns."""
        changed = sample_raw.assign(stage="Unknown")
        assert hash_dataframe(changed, ["company"]) == hash_dataframe(
            sample_raw, ["company"]
        )


class TestHashConfigAndFile:
    """Tests for config and file hashes."""

    def test_config_hash_stable(self, cleaning_config: CleaningConfig) -> None:
        """Test that equal configs hash equal and edits change the hash."""
        same = cleaning_config.model_copy()
        edited = cleaning_config.model_copy(update={"industry": IndustryConfig()})

        assert hash_config(same) == hash_config(cleaning_config)
        assert hash_config(edited) != hash_config(cleaning_config)
        assert len(hash_config(cleaning_config)) == 12

    def test_file_hash(self, tmp_path: Path) -> None:
        """Test the file hash against a known md5."""
        path = tmp_path / "x.txt"
        path.write_bytes(b"abc")
        assert hash_file_content(path) == "900150983cd24fb0d6963f7d28e17f72"
