# SPDX-License-Identifier: MIT
"""Tests for tsplan.core.classify."""

import pytest

from tsplan.core.classify import (
    ANY_ABI,
    WASMTIME_TARGETS,
    classify,
    supported_triples,
    validate_table,
)
from tsplan.core.errors import ClassificationError
from tsplan.core.triple import Abi, Arch, Os, TargetTriple

EXPECTED = [
    ("x86_64-linux-gnu", "wasmtime_c_api_x86_64_linux"),
    ("x86_64-linux-musl", "wasmtime_c_api_x86_64_musl"),
    ("x86_64-linux-android", "wasmtime_c_api_x86_64_android"),
    ("aarch64-linux-gnu", "wasmtime_c_api_aarch64_linux"),
    ("aarch64-linux-musl", "wasmtime_c_api_aarch64_musl"),
    ("aarch64-linux-android", "wasmtime_c_api_aarch64_android"),
    ("x86-linux-gnu", "wasmtime_c_api_i686_linux"),
    ("arm-linux-gnueabi", "wasmtime_c_api_armv7_linux"),
    ("s390x-linux-gnu", "wasmtime_c_api_s390x_linux"),
    ("riscv64-linux-gnu", "wasmtime_c_api_riscv64gc_linux"),
    ("x86_64-windows-gnu", "wasmtime_c_api_x86_64_mingw"),
    ("x86_64-windows-msvc", "wasmtime_c_api_x86_64_windows"),
    ("aarch64-windows-msvc", "wasmtime_c_api_aarch64_windows"),
    ("x86-windows-msvc", "wasmtime_c_api_i686_windows"),
    ("x86_64-macos-none", "wasmtime_c_api_x86_64_macos"),
    ("aarch64-macos-none", "wasmtime_c_api_aarch64_macos"),
]


class TestClassify:
    @pytest.mark.parametrize("text,identifier", EXPECTED)
    def test_supported(self, text, identifier):
        assert classify(TargetTriple.parse(text)) == identifier

    @pytest.mark.parametrize("abi", list(Abi))
    def test_macos_ignores_abi(self, abi):
        triple = TargetTriple(Arch.AARCH64, Os.MACOS, abi)
        assert classify(triple) == "wasmtime_c_api_aarch64_macos"

    @pytest.mark.parametrize(
        "text",
        [
            "mips-linux-gnu",  # unsupported arch
            "x86_64-freebsd-none",  # unsupported os
            "x86-linux-musl",  # unsupported abi for arch
            "arm-linux-gnueabihf",
            "aarch64-windows-gnu",
            "riscv64-macos-none",
            "wasm32-wasi-none",
        ],
    )
    def test_unsupported(self, text):
        with pytest.raises(ClassificationError):
            classify(TargetTriple.parse(text))

    @pytest.mark.parametrize("text", ["x86_64-linux", "x86_64-windows"])
    def test_two_part_triple_needs_explicit_abi(self, text):
        with pytest.raises(ClassificationError, match=f"{text}-none"):
            classify(TargetTriple.parse(text))

    def test_error_echoes_fields(self):
        triple = TargetTriple(Arch.MIPS, Os.LINUX, Abi.GNU)
        with pytest.raises(ClassificationError) as exc_info:
            classify(triple)
        err = exc_info.value
        assert (err.arch, err.os, err.abi) == ("mips", "linux", "gnu")
        assert str(err) == "Unsupported target for wasmtime: mips-linux-gnu"

    def test_deterministic(self):
        triple = TargetTriple(Arch.X86_64, Os.LINUX, Abi.MUSL)
        assert classify(triple) == classify(triple)


class TestSupportedTriples:
    def test_matches_expected_table(self):
        listed = {str(t): ident for t, ident in supported_triples()}
        assert listed == dict(EXPECTED)

    def test_every_listed_triple_classifies(self):
        for triple, identifier in supported_triples():
            assert classify(triple) == identifier

    def test_identifiers_unique(self):
        identifiers = [ident for _, ident in supported_triples()]
        assert len(identifiers) == len(set(identifiers))

    def test_every_other_triple_fails(self):
        supported = {t for t, _ in supported_triples()}
        for os_ in Os:
            for arch in Arch:
                for abi in Abi:
                    triple = TargetTriple(arch, os_, abi)
                    if triple in supported or (
                        os_ is Os.MACOS and TargetTriple(arch, os_) in supported
                    ):
                        continue
                    with pytest.raises(ClassificationError):
                        classify(triple)


class TestValidateTable:
    def test_builtin_table_is_valid(self):
        validate_table(WASMTIME_TARGETS)

    def test_duplicate_identifier(self):
        table = {
            Os.LINUX: {
                Arch.X86_64: {Abi.GNU: "bundle"},
                Arch.AARCH64: {Abi.GNU: "bundle"},
            }
        }
        with pytest.raises(ValueError, match="duplicate identifier 'bundle'"):
            validate_table(table)

    def test_any_abi_mixed_with_explicit(self):
        table = {
            Os.MACOS: {Arch.X86_64: {ANY_ABI: "a", Abi.GNU: "b"}},
        }
        with pytest.raises(ValueError, match="'any ABI' entry mixed"):
            validate_table(table)
