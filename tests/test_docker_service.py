from pathlib import Path

import pytest

from kubedeploy.exceptions import BuildError, MissingToolError, PublishError
from kubedeploy.models import ImageRef
from kubedeploy.services import DockerService


def _write_docker(tmp_path: Path, exit_code: int = 0) -> Path:
    docker = tmp_path / "bin" / "docker"
    docker.parent.mkdir()
    docker.write_text(
        f"""#!/usr/bin/env bash
echo "$(pwd -P) $*" >> "{tmp_path / 'calls.log'}"
if [[ {exit_code} -ne 0 ]]; then
  echo "step 3/7: failed to solve" >&2
fi
exit {exit_code}
""",
        encoding="utf-8",
    )
    docker.chmod(0o755)
    return docker


def test_build_runs_in_context_dir(tmp_path: Path) -> None:
    service = DockerService(docker=str(_write_docker(tmp_path)))
    image = ImageRef("bingo-grpc", "v3")

    assert service.is_available()
    assert service.build(image, tmp_path) == image
    assert (tmp_path / "calls.log").read_text(encoding="utf-8").splitlines() == [
        f"{tmp_path.resolve()} build -t bingo-grpc:v3 ."
    ]


def test_build_failure(tmp_path: Path) -> None:
    service = DockerService(docker=str(_write_docker(tmp_path, exit_code=1)))

    with pytest.raises(BuildError) as exc_info:
        service.build(ImageRef("bingo-grpc", "latest"), tmp_path)

    assert "failed to solve" in exc_info.value.context


def test_push_failure(tmp_path: Path) -> None:
    service = DockerService(docker=str(_write_docker(tmp_path, exit_code=1)))

    with pytest.raises(PublishError):
        service.push(ImageRef("bingo-grpc", "latest", registry="registry.example.com"))


def test_missing_docker(tmp_path: Path) -> None:
    service = DockerService(docker=str(tmp_path / "docker"))

    assert not service.is_available()
    with pytest.raises(MissingToolError):
        service.build(ImageRef("bingo-grpc", "latest"), tmp_path)
