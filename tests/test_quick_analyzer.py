import io
import json
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from QuickAnalyzer.checks.build import BuildCheck
from QuickAnalyzer.checks.dependencies import DependencyCheck
from QuickAnalyzer.checks.structure import StructureCheck
from QuickAnalyzer.checks.typescript import TypeCheck
from QuickAnalyzer.cli import main
from QuickAnalyzer.core.base import AnalysisContext, AnalysisError, Check, CheckOutcome, CheckRegistry, summarize
from QuickAnalyzer.core.colors import color_enabled, set_color_enabled
from QuickAnalyzer.core.findings import Finding, Kind, Priority
from QuickAnalyzer.core.pipeline import run_checks
from QuickAnalyzer.core.registry import register_builtin_checks, select_checks
from QuickAnalyzer.core.report import exit_code, render_report
from QuickAnalyzer.core.runner import CommandStatus, run_command

AUDIT = "audit --audit-level=moderate"
OUTDATED = "outdated"
TYPECHECK = "tsc --noEmit"
BUILD = "run build"

ALL_PASSING = {AUDIT: (0, "found 0 vulnerabilities\n"), OUTDATED: (0, ""), TYPECHECK: (0, ""), BUILD: (0, "built\n")}


def make_context(root, **overrides):
    return AnalysisContext(project_root=Path(root), **overrides)


def fake_run(responses):
    """Stand-in for subprocess.run keyed on the arguments after the executable."""

    def _run(argv, **kwargs):
        value = responses[" ".join(argv[1:])]
        if isinstance(value, BaseException):
            raise value
        returncode, stdout = value
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr="")

    return _run


def patched_toolchain(responses, missing=()):
    which = mock.patch(
        "QuickAnalyzer.core.runner.shutil.which",
        side_effect=lambda name: None if name in missing else f"/usr/bin/{name}",
    )
    run = mock.patch("QuickAnalyzer.core.runner.subprocess.run", side_effect=fake_run(responses))
    return which, run


class ToolchainTestCase(unittest.TestCase):
    def use_toolchain(self, responses, missing=()):
        which, run = patched_toolchain(responses, missing)
        which.start()
        self.addCleanup(which.stop)
        self.run_mock = run.start()
        self.addCleanup(run.stop)

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)


class TestRunCommand(unittest.TestCase):
    def test_missing_executable_is_not_an_exception(self) -> None:
        with mock.patch("QuickAnalyzer.core.runner.shutil.which", return_value=None), mock.patch(
            "QuickAnalyzer.core.runner.subprocess.run"
        ) as run:
            result = run_command(["npm", "audit"], Path("."), 30)
        run.assert_not_called()
        self.assertEqual(result.status, CommandStatus.MISSING)
        self.assertFalse(result.ran)
        self.assertIn("npm", result.reason)

    def test_timeout_is_reported(self) -> None:
        expired = subprocess.TimeoutExpired(cmd=["npm", "run", "build"], timeout=120)
        with mock.patch("QuickAnalyzer.core.runner.shutil.which", return_value="/usr/bin/npm"), mock.patch(
            "QuickAnalyzer.core.runner.subprocess.run", side_effect=expired
        ):
            result = run_command(["npm", "run", "build"], Path("."), 120)
        self.assertEqual(result.status, CommandStatus.TIMEOUT)
        self.assertIn("120", result.reason)

    def test_undecodable_output_does_not_escape_the_check(self) -> None:
        script = r"import sys; sys.stdout.buffer.write(b'\xff\xfe bad'); sys.exit(1)"
        with tempfile.TemporaryDirectory() as tmpdir:
            result = run_command([sys.executable, "-c", script], Path(tmpdir), 30)
            context = make_context(tmpdir, commands={"build": (sys.executable, "-c", script)})
            outcome = BuildCheck().inspect(context)

        self.assertTrue(result.failed)
        self.assertIn("\ufffd", result.stdout)
        self.assertIn("bad", result.stdout)
        self.assertEqual(len(outcome.findings), 1)
        self.assertIs(outcome.findings[0].kind, Kind.ERROR)
        self.assertIs(outcome.findings[0].priority, Priority.CRITICAL)

    def test_completed_passes_timeout_and_captures_output(self) -> None:
        completed = subprocess.CompletedProcess(["npm"], 1, stdout="out", stderr="err")
        with mock.patch("QuickAnalyzer.core.runner.shutil.which", return_value="/usr/bin/npm"), mock.patch(
            "QuickAnalyzer.core.runner.subprocess.run", return_value=completed
        ) as run:
            result = run_command(["npm", "outdated"], Path("/srv/app"), 30)
        kwargs = run.call_args.kwargs
        self.assertEqual(kwargs["timeout"], 30)
        self.assertTrue(kwargs["capture_output"])
        self.assertEqual(kwargs["cwd"], str(Path("/srv/app")))
        self.assertTrue(result.failed)
        self.assertEqual(result.output, "outerr")


class TestStructureCheck(unittest.TestCase):
    def test_reports_each_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "a.txt").write_text("a", encoding="utf-8")
            context = make_context(tmpdir, required_files=["a.txt", "b.txt", "c/d.txt"])
            outcome = StructureCheck().inspect(context)

        self.assertEqual(len(outcome.findings), 2)
        self.assertTrue(all(f.kind is Kind.ERROR and f.priority is Priority.HIGH for f in outcome.findings))
        self.assertIn("b.txt", outcome.findings[0].message)
        self.assertIn("c/d.txt", outcome.findings[1].message)
        self.assertEqual(outcome.notes, ("Found a.txt",))

    def test_scenario_summary(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "a.txt").write_text("a", encoding="utf-8")
            context = make_context(tmpdir, required_files=["a.txt", "b.txt"])
            result = run_checks([StructureCheck()], context, quiet=True)

        self.assertEqual([f.message for f in result.findings], ["Missing critical file: b.txt"])
        report = render_report(result.findings)
        self.assertIn("Errors: 1", report)
        self.assertIn("Warnings: 0", report)
        self.assertIn("Security Issues: 0", report)


class TestDependencyCheck(ToolchainTestCase):
    def test_vulnerabilities_yield_one_security_finding(self) -> None:
        self.use_toolchain({AUDIT: (1, "3 high severity vulnerabilities\n"), OUTDATED: (0, "")})
        outcome = DependencyCheck().inspect(make_context(self.root))
        self.assertEqual(len(outcome.findings), 1)
        finding = outcome.findings[0]
        self.assertIs(finding.kind, Kind.SECURITY)
        self.assertIs(finding.priority, Priority.HIGH)
        self.assertEqual(finding.details, "Run: npm audit for details")
        self.assertIsNone(outcome.skipped)

    def test_clean_audit_yields_nothing(self) -> None:
        self.use_toolchain({AUDIT: (0, "found 0 vulnerabilities\n"), OUTDATED: (0, "")})
        outcome = DependencyCheck().inspect(make_context(self.root))
        self.assertEqual(outcome.findings, ())
        self.assertIsNone(outcome.skipped)

    def test_outdated_exit_one_is_a_warning_not_an_error(self) -> None:
        listing = "Package  Current  Wanted  Latest\nreact    18.2.0   18.3.1  19.0.0\n"
        self.use_toolchain({AUDIT: (0, ""), OUTDATED: (1, listing)})
        outcome = DependencyCheck().inspect(make_context(self.root))
        self.assertEqual(len(outcome.findings), 1)
        self.assertIs(outcome.findings[0].kind, Kind.WARNING)
        self.assertIs(outcome.findings[0].priority, Priority.MEDIUM)
        self.assertEqual(outcome.findings[0].details, "Run: npm outdated for details")

    def test_missing_tool_skips_without_findings(self) -> None:
        self.use_toolchain({}, missing=("npm",))
        outcome = DependencyCheck().inspect(make_context(self.root))
        self.assertEqual(outcome.findings, ())
        self.assertIn("audit skipped", outcome.skipped)
        self.assertIn("outdated skipped", outcome.skipped)

    def test_audit_timeout_still_runs_outdated(self) -> None:
        expired = subprocess.TimeoutExpired(cmd="npm audit", timeout=30)
        self.use_toolchain({AUDIT: expired, OUTDATED: (1, "lodash 4.17.20 4.17.21\n")})
        outcome = DependencyCheck().inspect(make_context(self.root))
        self.assertEqual([f.kind for f in outcome.findings], [Kind.WARNING])
        self.assertIn("timed out", outcome.skipped)

    def test_failed_audit_without_evidence_is_skipped(self) -> None:
        self.use_toolchain({AUDIT: (1, "npm ERR! network\n"), OUTDATED: (0, "")})
        outcome = DependencyCheck().inspect(make_context(self.root))
        self.assertEqual(outcome.findings, ())
        self.assertIn("without a vulnerability report", outcome.skipped)


class TestTypeAndBuildChecks(ToolchainTestCase):
    def test_type_errors_yield_one_high_error(self) -> None:
        self.use_toolchain({TYPECHECK: (2, "src/App.tsx(3,1): error TS2304\nsrc/x.ts(1,1): error TS1005\n")})
        outcome = TypeCheck().inspect(make_context(self.root))
        self.assertEqual(len(outcome.findings), 1)
        self.assertIs(outcome.findings[0].kind, Kind.ERROR)
        self.assertIs(outcome.findings[0].priority, Priority.HIGH)

    def test_type_check_success_yields_nothing(self) -> None:
        self.use_toolchain({TYPECHECK: (0, "")})
        self.assertEqual(TypeCheck().inspect(make_context(self.root)).findings, ())

    def test_build_failure_is_critical(self) -> None:
        self.use_toolchain({BUILD: (1, "vite build failed\n")})
        outcome = BuildCheck().inspect(make_context(self.root))
        self.assertEqual(len(outcome.findings), 1)
        self.assertIs(outcome.findings[0].kind, Kind.ERROR)
        self.assertIs(outcome.findings[0].priority, Priority.CRITICAL)
        self.assertEqual(outcome.findings[0].details, "Run: npm run build for details")

    def test_build_timeout_is_a_failure(self) -> None:
        self.use_toolchain({BUILD: subprocess.TimeoutExpired(cmd="npm run build", timeout=120)})
        outcome = BuildCheck().inspect(make_context(self.root))
        self.assertIs(outcome.findings[0].priority, Priority.CRITICAL)

    def test_build_success_yields_nothing(self) -> None:
        self.use_toolchain({BUILD: (0, "")})
        self.assertEqual(BuildCheck().inspect(make_context(self.root)).findings, ())


class TestPipeline(ToolchainTestCase):
    def test_all_checks_passing_renders_success_only(self) -> None:
        for name in ("package.json", "tsconfig.json"):
            (self.root / name).write_text("{}", encoding="utf-8")
        self.use_toolchain(ALL_PASSING)
        context = make_context(self.root, required_files=["package.json", "tsconfig.json"])
        registry = CheckRegistry()
        register_builtin_checks(registry)

        result = run_checks(registry.create_all(), context, quiet=True)
        report = render_report(result.findings, result.skipped)

        self.assertEqual(result.findings, [])
        self.assertIn("No major issues found", report)
        self.assertNotIn("ISSUES FOUND", report)
        self.assertNotIn("SUMMARY", report)

    def test_findings_keep_check_order(self) -> None:
        self.use_toolchain(
            {
                AUDIT: (1, "1 moderate severity vulnerabilities\n"),
                OUTDATED: (1, "react 18 19\n"),
                TYPECHECK: (2, ""),
                BUILD: (1, ""),
            }
        )
        context = make_context(self.root, required_files=["package.json"])
        registry = CheckRegistry()
        register_builtin_checks(registry)

        result = run_checks(registry.create_all(), context, quiet=True)

        self.assertEqual(
            [(f.kind, f.priority) for f in result.findings],
            [
                (Kind.ERROR, Priority.HIGH),
                (Kind.SECURITY, Priority.HIGH),
                (Kind.WARNING, Priority.MEDIUM),
                (Kind.ERROR, Priority.HIGH),
                (Kind.ERROR, Priority.CRITICAL),
            ],
        )
        self.assertEqual(exit_code(result.findings), 1)

    def test_progress_output_per_stage(self) -> None:
        self.use_toolchain(ALL_PASSING)
        self.addCleanup(set_color_enabled, color_enabled())
        set_color_enabled(False)
        context = make_context(self.root, required_files=[])
        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            run_checks([DependencyCheck(), BuildCheck()], context)
        output = stdout.getvalue()
        self.assertIn("📦 Checking dependencies...", output)
        self.assertIn("✅ Build completed successfully", output)


class TestReport(unittest.TestCase):
    findings = [
        Finding(Kind.WARNING, "Outdated dependencies found", Priority.MEDIUM, "Run: npm outdated for details"),
        Finding(Kind.ERROR, "Build process failed", Priority.CRITICAL, "Run: npm run build for details"),
        Finding(Kind.SECURITY, "Security vulnerabilities found in dependencies", Priority.HIGH),
    ]

    def test_render_is_idempotent(self) -> None:
        self.assertEqual(render_report(self.findings), render_report(self.findings))

    def test_issues_listed_in_check_order(self) -> None:
        report = render_report(self.findings)
        self.assertIn("   1. ⚠️ [MEDIUM] Outdated dependencies found", report)
        self.assertIn("   2. ❌ [CRITICAL] Build process failed", report)
        self.assertIn("   3. 🔒 [HIGH] Security vulnerabilities found in dependencies", report)
        self.assertIn("      💡 Run: npm run build for details", report)

    def test_next_steps_fixed_order(self) -> None:
        report = render_report(self.findings)
        errors = report.index("Fix critical errors first")
        security = report.index("Address security issues")
        warnings = report.index("Review warnings")
        self.assertLess(errors, security)
        self.assertLess(security, warnings)

    def test_next_steps_only_for_present_kinds(self) -> None:
        report = render_report(self.findings[:1])
        self.assertNotIn("Fix critical errors first", report)
        self.assertNotIn("Address security issues", report)
        self.assertIn("1. Review warnings and optimizations", report)

    def test_skipped_checks_are_listed(self) -> None:
        report = render_report([], [("dependencies", "audit skipped (npm not found on PATH)")])
        self.assertIn("SKIPPED CHECKS", report)
        self.assertIn("dependencies: audit skipped", report)

    def test_summarize_counts_every_kind(self) -> None:
        counts = summarize(self.findings[:1])
        self.assertEqual(counts, {Kind.ERROR: 0, Kind.WARNING: 1, Kind.SECURITY: 0})

    def test_exit_code_policy(self) -> None:
        warning_only = self.findings[:1]
        self.assertEqual(exit_code([]), 0)
        self.assertEqual(exit_code(warning_only), 0)
        self.assertEqual(exit_code(warning_only, strict=True), 1)
        self.assertEqual(exit_code(self.findings), 1)

    def test_priority_ordering(self) -> None:
        self.assertLess(Priority.LOW, Priority.MEDIUM)
        self.assertLess(Priority.HIGH, Priority.CRITICAL)
        self.assertEqual(max(Priority), Priority.CRITICAL)
        self.assertLessEqual(Priority.LOW, Priority.HIGH)
        self.assertLessEqual(Priority.HIGH, Priority.HIGH)
        self.assertGreaterEqual(Priority.CRITICAL, Priority.MEDIUM)
        self.assertGreater(Priority.MEDIUM, Priority.LOW)


class TestRegistry(unittest.TestCase):
    def test_duplicate_slug_rejected(self) -> None:
        class Dummy(Check):
            slug = "structure"

            def inspect(self, context):
                return CheckOutcome()

        registry = CheckRegistry()
        register_builtin_checks(registry)
        with self.assertRaises(ValueError):
            registry.register(Dummy)

    def test_selection_keeps_run_order(self) -> None:
        registry = CheckRegistry()
        register_builtin_checks(registry)
        chosen = select_checks(registry, ["build", "structure"])
        self.assertEqual([c.slug for c in chosen], ["structure", "build"])
        with self.assertRaises(KeyError):
            select_checks(registry, ["lint"])

    def test_missing_project_dir_raises(self) -> None:
        with self.assertRaises(AnalysisError):
            AnalysisContext.from_config({}, Path("/definitely/not/here"))

    def test_bad_config_shapes_are_rejected(self) -> None:
        bad_configs = [
            ({"timeouts": {"build": "slow"}}, "timeouts.build"),
            ({"timeouts": {"audit": True}}, "timeouts.audit"),
            ({"timeouts": {"build": -5}}, "timeouts.build"),
            ({"timeouts": [30]}, "timeouts"),
            ({"commands": 42}, "commands"),
            ({"commands": {"build": 7}}, "commands.build"),
            ({"commands": {"build": ""}}, "commands.build"),
            ({"required_files": "package.json"}, "required_files"),
            ({"required_files": [1, 2]}, "required_files"),
            ({"project_dir": 5}, "project_dir"),
        ]
        with tempfile.TemporaryDirectory() as tmpdir:
            for config, key in bad_configs:
                with self.subTest(config=config):
                    with self.assertRaises(AnalysisError) as ctx:
                        AnalysisContext.from_config(config, Path(tmpdir))
                    self.assertIn(key, str(ctx.exception))

    def test_config_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = {
                "required_files": ["pnpm-lock.yaml"],
                "commands": {"build": "pnpm build"},
                "timeouts": {"build": 300},
            }
            context = AnalysisContext.from_config(config, Path(tmpdir))
        self.assertEqual(list(context.required_files), ["pnpm-lock.yaml"])
        self.assertEqual(context.commands["build"], ("pnpm", "build"))
        self.assertEqual(context.commands["audit"], ("npm", "audit", "--audit-level=moderate"))
        self.assertEqual(context.timeouts["build"], 300.0)


class TestCli(ToolchainTestCase):
    def run_cli(self, *argv):
        self.addCleanup(set_color_enabled, color_enabled())
        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout, mock.patch(
            "sys.stderr", new_callable=io.StringIO
        ) as stderr:
            code = main(["--no-color", *argv])
        return code, stdout.getvalue(), stderr.getvalue()

    def test_missing_file_exits_one(self) -> None:
        config_path = self.root / "analyzer.json"
        config_path.write_text(json.dumps({"required_files": ["package.json"]}), encoding="utf-8")
        code, out, _ = self.run_cli(
            "--quiet", "--project-dir", str(self.root), "--config", str(config_path), "--checks", "structure"
        )
        self.assertEqual(code, 1)
        self.assertIn("Missing critical file: package.json", out)
        self.assertNotIn("Checking project structure", out)

    def test_warning_only_passes_unless_strict(self) -> None:
        self.use_toolchain({AUDIT: (0, ""), OUTDATED: (1, "react 18 19\n")})
        code, out, _ = self.run_cli("--project-dir", str(self.root), "--checks", "dependencies")
        self.assertEqual(code, 0)
        self.assertIn("Warnings: 1", out)
        code, _, _ = self.run_cli("--quiet", "--strict", "--project-dir", str(self.root), "--checks", "dependencies")
        self.assertEqual(code, 1)

    def test_bad_config_value_is_a_top_level_failure(self) -> None:
        for config in ({"timeouts": {"build": "slow"}}, {"commands": 42}, {"required_files": "package.json"}):
            with self.subTest(config=config):
                config_path = self.root / "analyzer.json"
                config_path.write_text(json.dumps(config), encoding="utf-8")
                code, out, err = self.run_cli("--quiet", "--project-dir", str(self.root), "--config", str(config_path))
                self.assertEqual(code, 2)
                self.assertIn("Analysis failed", err)
                self.assertNotIn("Missing critical file", out)

    def test_missing_project_dir_is_a_top_level_failure(self) -> None:
        code, out, err = self.run_cli("--project-dir", str(self.root / "nope"))
        self.assertEqual(code, 2)
        self.assertIn("Analysis failed", err)
        self.assertNotIn("QUICK ANALYSIS REPORT", out)

    def test_unknown_check_is_usage_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("--checks", "lint")
        self.assertEqual(ctx.exception.code, 2)

    def test_list_checks(self) -> None:
        code, out, _ = self.run_cli("--list-checks")
        self.assertEqual(code, 0)
        self.assertEqual([line.split()[0] for line in out.splitlines()], ["structure", "dependencies", "typescript", "build"])


if __name__ == "__main__":
    unittest.main()
