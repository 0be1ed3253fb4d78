"""Path-based language classification for changed files."""

import fnmatch
import re
from collections.abc import Iterable

# Vendored, generated and binary paths do not reflect authored work.
IGNORE_PATTERNS: tuple[str, ...] = (
    # vendored dependencies
    r"(^|/)node_modules/",
    r"(^|/)bower_components/",
    r"(^|/)vendor/",
    r"(^|/)third_party/",
    r"(^|/)\.yarn/",
    r"(^|/)Pods/",
    # build output and caches
    r"(^|/)dist/",
    r"(^|/)build/",
    r"(^|/)out/",
    r"(^|/)target/",
    r"(^|/)__pycache__/",
    r"(^|/)\.next/",
    # generated sources
    r"\.min\.(js|css)$",
    r"\.map$",
    r"\.pb\.go$",
    r"_pb2(_grpc)?\.pyi?$",
    r"\.generated\.[^/]+$",
    # lock files
    r"(^|/)(package-lock\.json|npm-shrinkwrap\.json|yarn\.lock|pnpm-lock\.yaml)$",
    r"(^|/)(poetry\.lock|Pipfile\.lock|uv\.lock|Cargo\.lock|Gemfile\.lock)$",
    r"(^|/)(go\.sum|composer\.lock|flake\.lock|mix\.lock|pubspec\.lock)$",
    # binary and media
    r"\.(png|jpe?g|gif|bmp|ico|icns|webp|tiff?|psd|avif|heic)$",
    r"\.(woff2?|ttf|otf|eot)$",
    r"\.(zip|tar|gz|tgz|bz2|xz|7z|rar|jar|war|whl|egg)$",
    r"\.(mp3|wav|ogg|flac|mp4|mov|avi|mkv|webm)$",
    r"\.(pdf|docx?|xlsx?|pptx?)$",
    r"\.(exe|dll|so|dylib|a|o|obj|class|pyc|pyo|wasm|bin|dat)$",
    r"\.(sqlite3?|db)$",
)

# Exact basenames that carry no useful extension
FILENAMES: dict[str, str] = {
    "Dockerfile": "Dockerfile",
    "Containerfile": "Dockerfile",
    "Makefile": "Makefile",
    "makefile": "Makefile",
    "GNUmakefile": "Makefile",
    "CMakeLists.txt": "CMake",
    "Gemfile": "Ruby",
    "Rakefile": "Ruby",
    "Podfile": "Ruby",
    "Vagrantfile": "Ruby",
    "Jenkinsfile": "Groovy",
    "BUILD": "Starlark",
    "BUILD.bazel": "Starlark",
    "WORKSPACE": "Starlark",
    "go.mod": "Go Module",
    "Pipfile": "TOML",
    "Procfile": "Procfile",
    ".bashrc": "Shell",
    ".bash_profile": "Shell",
    ".zshrc": "Shell",
    ".profile": "Shell",
    ".gitignore": "Ignore List",
    ".dockerignore": "Ignore List",
    ".npmignore": "Ignore List",
    ".gitattributes": "Git Attributes",
    ".editorconfig": "EditorConfig",
    ".vimrc": "Vim Script",
}

# Compound suffixes are listed so that the longest match wins
EXTENSIONS: dict[str, str] = {
    ".d.ts": "TypeScript",
    ".blade.php": "Blade",
    ".py": "Python",
    ".pyi": "Python",
    ".pyx": "Cython",
    ".ipynb": "Jupyter Notebook",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TSX",
    ".mts": "TypeScript",
    ".cts": "TypeScript",
    ".vue": "Vue",
    ".svelte": "Svelte",
    ".astro": "Astro",
    ".java": "Java",
    ".kt": "Kotlin",
    ".kts": "Kotlin",
    ".scala": "Scala",
    ".groovy": "Groovy",
    ".gradle": "Gradle",
    ".clj": "Clojure",
    ".cljs": "Clojure",
    ".swift": "Swift",
    ".m": "Objective-C",
    ".mm": "Objective-C++",
    ".go": "Go",
    ".rs": "Rust",
    ".c": "C",
    ".h": "C",
    ".cc": "C++",
    ".cpp": "C++",
    ".cxx": "C++",
    ".hh": "C++",
    ".hpp": "C++",
    ".hxx": "C++",
    ".cs": "C#",
    ".fs": "F#",
    ".vb": "Visual Basic .NET",
    ".zig": "Zig",
    ".nim": "Nim",
    ".d": "D",
    ".php": "PHP",
    ".rb": "Ruby",
    ".erb": "HTML+ERB",
    ".pl": "Perl",
    ".pm": "Perl",
    ".lua": "Lua",
    ".r": "R",
    ".jl": "Julia",
    ".dart": "Dart",
    ".ex": "Elixir",
    ".exs": "Elixir",
    ".erl": "Erlang",
    ".hs": "Haskell",
    ".ml": "OCaml",
    ".elm": "Elm",
    ".sol": "Solidity",
    ".sql": "SQL",
    ".graphql": "GraphQL",
    ".gql": "GraphQL",
    ".proto": "Protocol Buffer",
    ".sh": "Shell",
    ".bash": "Shell",
    ".zsh": "Shell",
    ".fish": "fish",
    ".ps1": "PowerShell",
    ".psm1": "PowerShell",
    ".bat": "Batchfile",
    ".cmd": "Batchfile",
    ".html": "HTML",
    ".htm": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".sass": "Sass",
    ".less": "Less",
    ".styl": "Stylus",
    ".md": "Markdown",
    ".mdx": "MDX",
    ".markdown": "Markdown",
    ".rst": "reStructuredText",
    ".tex": "TeX",
    ".adoc": "AsciiDoc",
    ".txt": "Text",
    ".json": "JSON",
    ".jsonc": "JSON with Comments",
    ".yml": "YAML",
    ".yaml": "YAML",
    ".toml": "TOML",
    ".ini": "INI",
    ".cfg": "INI",
    ".xml": "XML",
    ".svg": "SVG",
    ".csv": "CSV",
    ".tf": "HCL",
    ".hcl": "HCL",
    ".nix": "Nix",
    ".cmake": "CMake",
    ".mk": "Makefile",
    ".vim": "Vim Script",
    ".el": "Emacs Lisp",
}

# Interpreter name from a shebang line
INTERPRETERS: dict[str, str] = {
    "python": "Python",
    "python2": "Python",
    "python3": "Python",
    "node": "JavaScript",
    "deno": "TypeScript",
    "bun": "TypeScript",
    "sh": "Shell",
    "bash": "Shell",
    "zsh": "Shell",
    "dash": "Shell",
    "ruby": "Ruby",
    "perl": "Perl",
    "php": "PHP",
    "lua": "Lua",
    "Rscript": "R",
    "fish": "fish",
    "pwsh": "PowerShell",
}

_SHEBANG_RE = re.compile(r"^#!\s*\S+.*")
_SUFFIXES = sorted(EXTENSIONS, key=len, reverse=True)


class LanguageClassifier:
    """Maps a changed-file path to a language name.

    Classification is pure and never raises: ignored or unrecognized paths
    yield None and are left out of aggregation.
    """

    def __init__(
        self,
        extra_ignore_patterns: Iterable[str] = (),
        ignore_patterns: Iterable[str] = IGNORE_PATTERNS,
    ):
        self._ignore = [re.compile(p) for p in ignore_patterns]
        self._globs = tuple(extra_ignore_patterns)

    def is_ignored(self, path: str) -> bool:
        """Whether path is vendored, generated or binary."""
        path = _normalize(path)
        if any(rx.search(path) for rx in self._ignore):
            return True
        basename = path.rsplit("/", 1)[-1]
        return any(
            fnmatch.fnmatch(path, pat) or fnmatch.fnmatch(basename, pat) for pat in self._globs
        )

    def classify(self, path: str, sample: str | None = None) -> str | None:
        """Return the language of path, or None if it is ignored or unknown.

        Args:
            path: Repository-relative file path
            sample: Optional file content or diff patch, used for shebang detection
        """
        if not path:
            return None

        path = _normalize(path)
        if self.is_ignored(path):
            return None

        basename = path.rsplit("/", 1)[-1]
        if basename in FILENAMES:
            return FILENAMES[basename]
        if basename.lower().startswith("dockerfile."):
            return "Dockerfile"

        lowered = basename.lower()
        for suffix in _SUFFIXES:
            # ".py" alone is a dotfile, not a Python file
            if lowered.endswith(suffix) and len(lowered) > len(suffix):
                return EXTENSIONS[suffix]

        if sample:
            return language_from_shebang(sample)
        return None


def language_from_shebang(sample: str) -> str | None:
    """Detect a language from the shebang on the first content line of sample.

    Diff patches are accepted: hunk headers are skipped and the leading
    +/-/space marker is stripped from the first content line.
    """
    for line in sample.splitlines():
        if line.startswith("@@"):
            continue
        if line[:1] in ("+", "-", " "):
            line = line[1:]
        break
    else:
        return None

    match = _SHEBANG_RE.match(line.strip())
    if not match:
        return None

    words = match.group(0)[2:].split()
    interpreter = words[0].rsplit("/", 1)[-1]
    if interpreter == "env":
        # Skip env's flags (-S, -i) and VAR=value assignments
        args = [w for w in words[1:] if not w.startswith("-") and "=" not in w]
        if not args:
            return None
        interpreter = args[0].rsplit("/", 1)[-1]
    return INTERPRETERS.get(interpreter) or INTERPRETERS.get(interpreter.rstrip("0123456789."))


def _normalize(path: str) -> str:
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path
