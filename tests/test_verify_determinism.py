from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from artifacts.write import generate_all_artifacts
from verify.verify import DeterminismResult, verify_determinism

if TYPE_CHECKING:
    from pathlib import Path


def test_verify_determinism_requires_artifacts_dir(
    mini_solution: Path, tmp_path: Path
) -> None:
    missing_dir = tmp_path / "missing"
    with pytest.raises(FileNotFoundError, match="Artifacts directory does not exist"):
        verify_determinism(root=mini_solution, artifacts_dir=missing_dir)


def test_verify_determinism_rejects_files(mini_solution: Path, tmp_path: Path) -> None:
    not_a_dir = tmp_path / "file.txt"
    not_a_dir.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        verify_determinism(root=mini_solution, artifacts_dir=not_a_dir)


def test_generated_artifacts_are_deterministic(
    mini_solution: Path, tmp_path: Path
) -> None:
    artifacts_dir = tmp_path / "artifacts"
    generate_all_artifacts(root=mini_solution, out_dir=artifacts_dir)

    result = verify_determinism(root=mini_solution, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(ok=True)


def test_verify_determinism_relative_paths_and_sorted_mismatches(
    mini_solution: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    artifacts_dir = tmp_path / "artifacts"
    artifacts_dir.mkdir()

    for rel_path, content in (
        ("b.txt", "b-original"),
        ("a.txt", "a-original"),
        ("c.txt", "c-original"),
    ):
        (artifacts_dir / rel_path).write_text(content, encoding="utf-8")

    def _fake_generate_all_artifacts(
        *, root: Path, out_dir: Path, catalog_path: Path | None
    ) -> dict[str, object]:
        (out_dir / "a.txt").write_text("a-original", encoding="utf-8")
        (out_dir / "b.txt").write_text("b-regenerated", encoding="utf-8")
        (out_dir / "d.txt").write_text("d-new", encoding="utf-8")
        return {"artifacts": []}

    monkeypatch.setattr(
        "verify.verify.generate_all_artifacts",
        _fake_generate_all_artifacts,
    )

    result = verify_determinism(root=mini_solution, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(
        ok=False,
        mismatches=("b.txt",),
        missing=("c.txt",),
        extra=("d.txt",),
    )


def test_edited_artifact_is_a_mismatch(mini_solution: Path, tmp_path: Path) -> None:
    artifacts_dir = tmp_path / "artifacts"
    generate_all_artifacts(root=mini_solution, out_dir=artifacts_dir)
    (artifacts_dir / "statistics.json").write_text("{}", encoding="utf-8")

    result = verify_determinism(root=mini_solution, artifacts_dir=artifacts_dir)

    assert result.mismatches == ("statistics.json",)
    assert not result.ok
