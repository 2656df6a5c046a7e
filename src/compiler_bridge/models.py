"""
Pydantic models for the compiler service wire format.

These models describe exactly what goes over HTTP and nothing more.  The
domain types the rest of the package works with (``CompilerEntry``,
``CompileResult``) are built from them in ``catalog.py`` and
``compiler.py``.

Models are organized into two categories:
1. Request models: data sent TO the compiler service
2. Response models: data received FROM the compiler service

Field names on the wire are camelCase; the models expose snake_case
attributes and use aliases for (de)serialization.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Fields requested from the compiler list endpoint, in wire order.
COMPILER_FIELDS = (
    "id",
    "name",
    "lang",
    "semver",
    "instructionSet",
    "supportsBinary",
    "supportsExecute",
)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# REQUEST MODELS (Bridge → Compiler service)
# ============================================================================


class CompilerOptions(_WireModel):
    """Backend options; ``executor_request`` asks for build-and-run."""

    executor_request: bool = Field(default=False, alias="executorRequest")


class CompileFilters(_WireModel):
    """
    Output filters applied by the compiler service.

    The defaults mirror the service's web UI: Intel syntax, demangled
    symbols, and labels/directives/comments/library code stripped.
    ``execute`` must match ``CompilerOptions.executor_request``.
    """

    binary: bool = False
    execute: bool = False
    intel: bool = True
    demangle: bool = True
    labels: bool = True
    directives: bool = True
    comment_only: bool = Field(default=True, alias="commentOnly")
    library_code: bool = Field(default=True, alias="libraryCode")


class CompileRequestOptions(_WireModel):
    user_arguments: str = Field(default="", alias="userArguments")
    compiler_options: CompilerOptions = Field(
        default_factory=CompilerOptions, alias="compilerOptions"
    )
    filters: CompileFilters = Field(default_factory=CompileFilters)


class CompileRequest(_WireModel):
    """
    Body of ``POST /api/compiler/{id}/compile``.

    Attributes:
        source: Source code to compile.
        options: User arguments, executor flag and output filters.
    """

    source: str
    options: CompileRequestOptions = Field(default_factory=CompileRequestOptions)

    @classmethod
    def build(cls, code: str, user_args: str, execute: bool) -> CompileRequest:
        """Build a request carrying the code, raw user arguments and execute flag."""
        return cls(
            source=code,
            options=CompileRequestOptions(
                user_arguments=user_args,
                compiler_options=CompilerOptions(executor_request=execute),
                filters=CompileFilters(execute=execute),
            ),
        )

    def to_payload(self) -> dict:
        """Serialise with wire (camelCase) field names."""
        return self.model_dump(by_alias=True)


# ============================================================================
# RESPONSE MODELS (Compiler service → Bridge)
# ============================================================================


class CompilerListing(_WireModel):
    """One record of ``GET /api/compilers``."""

    id: str
    name: str
    lang: str
    semver: str | None = None
    instruction_set: str | None = Field(default=None, alias="instructionSet")
    supports_binary: bool = Field(default=False, alias="supportsBinary")
    supports_execute: bool = Field(default=False, alias="supportsExecute")


class OutputLine(_WireModel):
    """A single line of compiler, program or assembly output."""

    text: str = ""


def _join(*streams: list[OutputLine]) -> str:
    return "\n".join(line.text for stream in streams for line in stream)


class BuildResult(_WireModel):
    """Build step of an execution request."""

    code: int = 0
    stdout: list[OutputLine] = Field(default_factory=list)
    stderr: list[OutputLine] = Field(default_factory=list)


class CompileResponse(_WireModel):
    """
    Response of the compile endpoint.

    Assembly requests fill ``asm``; execution requests fill ``stdout`` and
    ``stderr`` with the program's output and report the compiler's own
    output under ``build_result``.

    Attributes:
        code: Exit code of the compiler (assembly) or the program
              (execution).  Zero means success.
    """

    code: int
    stdout: list[OutputLine] = Field(default_factory=list)
    stderr: list[OutputLine] = Field(default_factory=list)
    asm: list[OutputLine] | None = None
    did_execute: bool | None = Field(default=None, alias="didExecute")
    build_result: BuildResult | None = Field(default=None, alias="buildResult")

    def is_success(self) -> bool:
        return self.code == 0

    def aggregate_run_out(self) -> str:
        """Assembly listing when present, else the program's stdout then stderr."""
        if self.asm is not None:
            return _join(self.asm)
        return _join(self.stdout, self.stderr)

    def aggregate_comp_out(self) -> str:
        """Compiler diagnostics: build step output when present, else stderr then stdout."""
        if self.build_result is not None:
            return _join(self.build_result.stderr, self.build_result.stdout)
        return _join(self.stderr, self.stdout)
