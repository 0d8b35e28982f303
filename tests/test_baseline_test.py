"""Integration tests running a stand-in generator end to end.

The generator is a small Python script (see conftest.py) that writes
src/index.ts into its --output_dir, so these tests exercise the real
subprocess path together with the tree comparison.
"""

import pytest

from baseline_harness.errors import GeneratorError
from baseline_harness.models.comparison import PathStatus
from baseline_harness.runner.baseline_test import assert_baseline, run_baseline_test


@pytest.mark.integration
class TestRunBaselineTest:
    """Tests for run_baseline_test() and assert_baseline()."""

    def test_matching_output_passes(self, harness_config, showcase_options):
        verdict = run_baseline_test(harness_config, showcase_options)
        assert verdict.passed
        assert verdict.warnings == []
        assert verdict.files_visited == 1

    def test_output_dir_is_cleared_first(self, tmp_path, harness_config, showcase_options):
        stale = tmp_path / ".baseline-test-out" / "stale.ts"
        stale.parent.mkdir(parents=True)
        stale.write_text("left over from a previous run")
        verdict = run_baseline_test(harness_config, showcase_options)
        assert verdict.passed
        assert not stale.exists()

    def test_changed_baseline_fails(self, tmp_path, harness_config, showcase_options):
        (tmp_path / "baselines" / "showcase" / "src" / "index.ts.baseline").write_text("export { x };\n")
        verdict = run_baseline_test(harness_config, showcase_options)
        assert not verdict.passed
        assert verdict.statuses[0].status == PathStatus.MISMATCHED

    def test_generator_receives_fixture_flags(self, tmp_path, harness_config, showcase_options, monkeypatch):
        args_file = tmp_path / "args.txt"
        monkeypatch.setenv("FAKE_GENERATOR_ARGS", str(args_file))
        options = showcase_options.model_copy(update={"main_service_name": "Echo", "template": "typescript_gapic"})
        run_baseline_test(harness_config, options)
        args = args_file.read_text().split("\n")
        assert f"--output_dir={(tmp_path / '.baseline-test-out').resolve()}" in args
        assert "--main-service=Echo" in args
        assert "--template=typescript_gapic" in args

    def test_generator_failure_aborts_before_compare(self, harness_config, showcase_options):
        options = showcase_options.model_copy(update={"package_name": "explode"})
        with pytest.raises(GeneratorError) as exc_info:
            run_baseline_test(harness_config, options)
        assert exc_info.value.returncode == 3
        assert "generator exploded" in exc_info.value.stderr

    def test_assert_baseline_raises_on_mismatch(self, tmp_path, harness_config, showcase_options):
        (tmp_path / "baselines" / "showcase" / "README.md.baseline").write_text("docs")
        with pytest.raises(AssertionError, match="showcase"):
            assert_baseline(harness_config, showcase_options)

    def test_assert_baseline_returns_verdict_on_pass(self, harness_config, showcase_options):
        assert assert_baseline(harness_config, showcase_options).passed

    def test_non_utf8_generator_output_still_compares(self, harness_config, showcase_options):
        options = showcase_options.model_copy(update={"package_name": "noisy"})
        verdict = run_baseline_test(harness_config, options)
        assert verdict.passed
