from pathlib import Path
import os, subprocess, sys

from conftest import sha256_token


def run(cmd: list[str], cwd: Path, env: dict, code: int = 0):
    res = subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True)
    if res.returncode != code:
        print("STDOUT:\n", res.stdout)
        print("STDERR:\n", res.stderr)
    assert res.returncode == code
    return res


def _env(repo: Path) -> dict:
    env = {k: v for k, v in os.environ.items() if not k.startswith("CSP_")}
    env["PYTHONPATH"] = str(repo)  # make 'csp_headers' importable from the sandbox
    return env


def test_end_to_end_offline(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    work = Path(tmp_path)

    (work / "public/blog").mkdir(parents=True)
    (work / "public/drafts").mkdir(parents=True)
    (work / "public/index.html").write_text("<script>boot()</script>")
    (work / "public/blog/index.html").write_text("<p>static</p>")
    (work / "public/drafts/index.html").write_text("<script>draft()</script>")

    (work / "csp.yml").write_text(
        """\
buildDir: public
exclude:
  - "!public/drafts/**"
policies:
  defaultSrc: "'self'"
"""
    )

    py = sys.executable
    env = _env(repo)

    res = run([py, "-m", "csp_headers.cli", "generate", "--policy", "img-src=data:"], cwd=work, env=env)
    assert "Updated 1 path(s)." in res.stdout

    headers = (work / "public/_headers").read_text()
    assert headers == f"/\n  default-src 'self'; img-src data:; script-src {sha256_token('boot()')} ;\n"

    # re-running rewrites rather than duplicating
    run([py, "-m", "csp_headers.cli", "generate", "--policy", "img-src=data:"], cwd=work, env=env)
    assert (work / "public/_headers").read_text() == headers

    res = run([py, "-m", "csp_headers.cli", "hashes", "public/drafts/index.html"], cwd=work, env=env)
    assert res.stdout.split() == [sha256_token("draft()")]


def test_missing_build_dir_is_a_usage_error(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    run([sys.executable, "-m", "csp_headers.cli", "generate"], cwd=tmp_path, env=_env(repo), code=1)
