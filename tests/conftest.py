"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local covboard package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of covboard modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("covboard"):
        del sys.modules[module_name]


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """A small Go module with two test packages and one vendored package.

    Layout:
        go.mod                  (module example.com/demo)
        main.go
        calc/calc.go
        calc/calc_test.go
        util/strs/strs.go
        util/strs/strs_test.go
        docs/README.md
        vendor/dep/dep_test.go  (must be pruned)
    """
    root = tmp_path / "demo"
    root.mkdir()
    (root / "go.mod").write_text("module example.com/demo\n\ngo 1.22\n")
    (root / "main.go").write_text("package main\n\nfunc main() {}\n")

    calc = root / "calc"
    calc.mkdir()
    (calc / "calc.go").write_text(
        "package calc\n\nfunc Add(a, b int) int {\n\treturn a + b\n}\n\n"
        "func Sub(a, b int) int {\n\treturn a - b\n}\n"
    )
    (calc / "calc_test.go").write_text("package calc\n")

    strs = root / "util" / "strs"
    strs.mkdir(parents=True)
    (strs / "strs.go").write_text("package strs\n")
    (strs / "strs_test.go").write_text("package strs\n")

    docs = root / "docs"
    docs.mkdir()
    (docs / "README.md").write_text("# docs\n")

    vendored = root / "vendor" / "dep"
    vendored.mkdir(parents=True)
    (vendored / "dep_test.go").write_text("package dep\n")
    return root


FAKE_GO_SCRIPT = """#!/bin/sh
# Stand-in for the go tool. Behaviour is driven by FAKE_GO_* env vars.
if [ "$1" = "tool" ]; then
    # go tool cover -html=<profile> -o <out>
    if [ -n "$FAKE_GO_COVER_FAIL" ]; then
        echo "cover: cannot open profile"
        exit 1
    fi
    printf '<html><head><title>cov</title></head><body>%s</body></html>' "$3" > "$5"
    exit 0
fi

profile=""
for arg in "$@"; do
    case "$arg" in
        -coverprofile=*) profile="${arg#-coverprofile=}" ;;
    esac
done

echo "args: $*"
if [ -n "$FAKE_GO_PROFILE" ] && [ -n "$profile" ]; then
    printf '%s' "$FAKE_GO_PROFILE" > "$profile"
fi
if [ -n "$FAKE_GO_PID_DIR" ]; then
    echo $$ > "$FAKE_GO_PID_DIR/$$.tmp" && mv "$FAKE_GO_PID_DIR/$$.tmp" "$FAKE_GO_PID_DIR/$$.pid"
fi
if [ -n "$FAKE_GO_SLEEP" ]; then
    exec sleep "$FAKE_GO_SLEEP"
fi
printf '%s\\n' "${FAKE_GO_OUTPUT:-ok}"
exit "${FAKE_GO_EXIT:-0}"
"""


@pytest.fixture
def fake_go(tmp_path: Path) -> Path:
    """Executable shell script that mimics ``go test`` and ``go tool cover``."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "go"
    script.write_text(FAKE_GO_SCRIPT)
    script.chmod(0o755)
    return script
