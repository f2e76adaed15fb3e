"""
End-to-end tests for the plugin CLI.
"""

import base64
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from kubeci_kubectl.cli import app

runner = CliRunner()


@pytest.fixture
def kubectl():
    """Pretend kubectl is installed and capture the child invocation."""
    with patch(
        "kubeci_kubectl.execution.runner.shutil.which",
        return_value="/usr/bin/kubectl",
    ), patch("kubeci_kubectl.execution.runner.subprocess.run") as run:
        run.return_value = MagicMock(returncode=0)
        yield run


class TestDryRun:
    def test_prints_assembled_command(self, monkeypatch, kubectl):
        monkeypatch.setenv("PLUGIN_KUBECTL", "apply")
        monkeypatch.setenv("PLUGIN_FILES", "a.yaml,b.yaml")
        monkeypatch.setenv("PLUGIN_NAMESPACE", "app")
        monkeypatch.setenv("PLUGIN_DRY_RUN", "true")

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "+ kubectl apply -f a.yaml -f b.yaml --namespace app" in result.output
        kubectl.assert_not_called()

    def test_cli_options_override_environment(self, monkeypatch, kubectl):
        monkeypatch.setenv("PLUGIN_KUBECTL", "apply")
        monkeypatch.setenv("PLUGIN_NAMESPACE", "app")

        result = runner.invoke(
            app,
            ["--kubectl", "get pods -n drone", "--namespace", "other", "--dry-run"],
        )

        assert result.exit_code == 0
        assert "+ kubectl get pods -n drone\n" in result.output
        kubectl.assert_not_called()

    def test_templated_command(self, monkeypatch, kubectl):
        monkeypatch.setenv("DRONE_COMMIT", "v1.2.3")
        monkeypatch.setenv(
            "PLUGIN_KUBECTL",
            "set image deployment/foo container=bar/baz:{{ .DroneCommit }}",
        )
        monkeypatch.setenv("PLUGIN_DRY_RUN", "true")

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert (
            "+ kubectl set image deployment/foo container=bar/baz:v1.2.3"
            in result.output
        )


class TestRun:
    def test_propagates_exit_code(self, monkeypatch, kubectl):
        kubectl.return_value = MagicMock(returncode=2)
        monkeypatch.setenv("PLUGIN_KUBECTL", "get pods")

        result = runner.invoke(app, [])

        assert result.exit_code == 2
        assert kubectl.call_args.args[0] == ["/usr/bin/kubectl", "get", "pods"]

    def test_signal_exit_status(self, monkeypatch, kubectl):
        kubectl.return_value = MagicMock(returncode=-9)
        monkeypatch.setenv("PLUGIN_KUBECTL", "get pods")

        result = runner.invoke(app, [])

        assert result.exit_code == 137

    def test_in_cluster_credentials(self, monkeypatch, kubectl):
        monkeypatch.setenv("PLUGIN_KUBECTL", "get pods")

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "KUBECONFIG" not in kubectl.call_args.kwargs["env"]

    def test_kubeconfig_file_lifecycle(self, monkeypatch, kubectl):
        seen = {}

        def fake_run(argv, env, check):
            path = Path(env["KUBECONFIG"])
            seen["path"] = path
            seen["content"] = path.read_text()
            return MagicMock(returncode=0)

        kubectl.side_effect = fake_run
        monkeypatch.setenv("PLUGIN_KUBECTL", "get pods")
        monkeypatch.setenv(
            "KUBECONFIG", base64.b64encode(b"apiVersion: v1\n").decode()
        )

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert seen["content"] == "apiVersion: v1\n"
        assert seen["path"].name.startswith("kubeconfig-")
        assert not seen["path"].exists()

    def test_rendered_templates_removed_after_run(self, monkeypatch, tmp_path, kubectl):
        seen = {}

        def fake_run(argv, env, check):
            seen["argv"] = argv
            seen["content"] = Path(argv[-1]).read_text()
            return MagicMock(returncode=0)

        kubectl.side_effect = fake_run
        template = tmp_path / "deploy.yaml"
        template.write_text("image: app:{{ .DroneCommit }}\n")
        monkeypatch.setenv("DRONE_COMMIT", "v1.2.3")
        monkeypatch.setenv("PLUGIN_KUBECTL", "apply")
        monkeypatch.setenv("PLUGIN_TEMPLATES", str(template))

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert seen["argv"][1:3] == ["apply", "-f"]
        assert seen["content"] == "image: app:v1.2.3\n"
        assert not Path(seen["argv"][-1]).exists()


class TestFailures:
    def test_missing_command(self, kubectl):
        result = runner.invoke(app, [])

        assert result.exit_code == 1
        kubectl.assert_not_called()

    def test_malformed_kubeconfig(self, monkeypatch, kubectl):
        monkeypatch.setenv("PLUGIN_KUBECTL", "get pods")
        monkeypatch.setenv("KUBECONFIG", "not base64!")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        kubectl.assert_not_called()

    def test_bad_command_template(self, monkeypatch, kubectl):
        monkeypatch.setenv("PLUGIN_KUBECTL", "get {{ .Missing }}")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        kubectl.assert_not_called()

    def test_invalid_setting(self, monkeypatch, kubectl):
        monkeypatch.setenv("PLUGIN_KUBECTL", "get pods")
        monkeypatch.setenv("PLUGIN_DRY_RUN", "maybe")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        kubectl.assert_not_called()

    def test_missing_kubectl_binary(self, monkeypatch):
        monkeypatch.setenv("PLUGIN_KUBECTL", "get pods")
        with patch("kubeci_kubectl.execution.runner.shutil.which", return_value=None):
            result = runner.invoke(app, [])

        assert result.exit_code == 1
