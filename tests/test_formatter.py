"""Tests for rendering compile results as chat messages."""

import pytest

from compiler_bridge.compiler import CompileResult, RunKind
from compiler_bridge.formatter import (
    MANGLED_WARNING,
    NO_OUTPUT,
    TRUNCATED_LENGTH,
    TRUNCATED_WARNING,
    header,
    render,
    syntax_tag,
)
from compiler_bridge.versions import OptionalVersion


def make_result(
    output: str = "main:\n        ret",
    *,
    is_success: bool = True,
    version: str | None = "14.2",
    compiler_name: str = "x86-64 gcc 14.2",
    run_kind: RunKind = RunKind.ASSEMBLY,
) -> CompileResult:
    return CompileResult(
        output=output,
        is_success=is_success,
        version=OptionalVersion.parse(version),
        compiler_name=compiler_name,
        run_kind=run_kind,
    )


@pytest.mark.unit
class TestHeader:
    def test_success_header_omits_contained_version(self):
        assert header(make_result()) == "**success** (x86-64 gcc 14.2)"

    def test_error_header(self):
        assert header(make_result(is_success=False)) == "**error** (x86-64 gcc 14.2)"

    def test_version_appended_when_not_in_name(self):
        result = make_result(version="1.80.0", compiler_name="rustc stable")
        assert header(result) == "**success** (rustc stable 1.80.0)"

    def test_absent_version_never_appended(self):
        result = make_result(version=None, compiler_name="x86-64 clang (trunk)")
        assert header(result) == "**success** (x86-64 clang (trunk))"

    def test_upstream_version_text_is_kept(self):
        result = make_result(version="1.80.0-beta.1", compiler_name="rustc 1.80.0-beta.1")
        assert header(result) == "**success** (rustc 1.80.0-beta.1)"

    def test_unnormalised_version_appended_verbatim(self):
        result = make_result(version="14.02", compiler_name="acme cc")
        assert header(result) == "**success** (acme cc 14.02)"


@pytest.mark.unit
class TestSyntaxTag:
    def test_successful_assembly(self):
        assert syntax_tag(make_result()) == "x86asm"

    def test_failed_assembly(self):
        assert syntax_tag(make_result(is_success=False)) == "ansi"

    @pytest.mark.parametrize("is_success", [True, False])
    def test_execution(self, is_success):
        assert syntax_tag(make_result(is_success=is_success, run_kind=RunKind.EXECUTION)) == "ansi"


@pytest.mark.unit
class TestRender:
    def test_plain_message(self):
        message = render(make_result())

        assert message == "**success** (x86-64 gcc 14.2)\n```x86asm\nmain:\n        ret```\n"

    def test_empty_assembly_gets_mangled_warning_and_placeholder(self):
        message = render(make_result(output=""))

        assert message == (
            "**success** (x86-64 gcc 14.2)\n```x86asm\n" f"{NO_OUTPUT}```\n{MANGLED_WARNING}"
        )

    def test_whitespace_only_assembly_warns_but_keeps_output(self):
        message = render(make_result(output="  \n"))

        assert MANGLED_WARNING in message
        assert NO_OUTPUT not in message

    def test_empty_execution_output_has_no_mangled_warning(self):
        message = render(make_result(output="", run_kind=RunKind.EXECUTION))

        assert MANGLED_WARNING not in message
        assert f"```ansi\n{NO_OUTPUT}```" in message

    def test_long_output_is_truncated(self):
        message = render(make_result(output="x" * 2500, run_kind=RunKind.EXECUTION))

        body = message.split("```ansi\n", 1)[1].split("```", 1)[0]
        assert body == "x" * TRUNCATED_LENGTH
        assert len(body) == 1840
        assert message.endswith(TRUNCATED_WARNING)

    def test_output_at_threshold_is_not_truncated(self):
        message = render(make_result(output="x" * 1900))

        assert "x" * 1900 in message
        assert TRUNCATED_WARNING not in message

    def test_output_just_over_threshold_is_truncated(self):
        message = render(make_result(output="x" * 1901))

        assert "x" * 1841 not in message
        assert TRUNCATED_WARNING in message

    def test_truncation_length_is_fixed_for_other_limits(self):
        message = render(make_result(output="x" * 5000), message_limit=4000)

        assert "x" * 5000 not in message
        body = message.split("```x86asm\n", 1)[1].split("```", 1)[0]
        assert len(body) == TRUNCATED_LENGTH

    def test_larger_limit_keeps_long_output(self):
        message = render(make_result(output="x" * 2500), message_limit=4000)

        assert "x" * 2500 in message
        assert TRUNCATED_WARNING not in message

    def test_long_whitespace_assembly_gets_both_warnings(self):
        message = render(make_result(output=" " * 2500))

        body = message.split("```x86asm\n", 1)[1].split("```", 1)[0]
        assert body == " " * TRUNCATED_LENGTH
        assert NO_OUTPUT not in message
        assert message.endswith(MANGLED_WARNING + "\n" + TRUNCATED_WARNING)

    def test_render_is_pure(self):
        result = make_result(output="")
        assert render(result) == render(result)
        assert result.output == ""
