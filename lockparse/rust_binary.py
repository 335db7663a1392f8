"""Reads crate lists embedded in Rust binaries built with cargo-auditable."""

from __future__ import annotations

import json
import struct
import zlib
from typing import IO, Any

from lockparse.types import Dependency, Library, ParseError, Parser
from lockparse.utils import package_id

_SECTION = b".dep-v0"


class UnrecognizedExecutableError(ParseError):
    """The data is not an ELF, PE or Mach-O executable."""

    def __init__(self) -> None:
        super().__init__("unrecognized executable format")


class NonRustBinaryError(ParseError):
    """The executable carries no cargo-auditable dependency data."""

    def __init__(self) -> None:
        super().__init__("non Rust auditable binary")


def _unpack(fmt: str, data: bytes, offset: int) -> tuple:
    try:
        return struct.unpack_from(fmt, data, offset)
    except struct.error as exc:
        raise UnrecognizedExecutableError() from exc


def _slice(data: bytes, offset: int, size: int) -> bytes:
    if offset < 0 or size < 0 or offset + size > len(data):
        raise ParseError("section lies outside the file")
    return data[offset : offset + size]


def _elf_section(data: bytes) -> bytes | None:
    cls, order = data[4], data[5]
    e = "<" if order == 1 else ">"
    if cls == 2:
        (shoff,) = _unpack(e + "Q", data, 0x28)
        shentsize, shnum, shstrndx = _unpack(e + "HHH", data, 0x3A)
        header = e + "IIQQQQ"
    elif cls == 1:
        (shoff,) = _unpack(e + "I", data, 0x20)
        shentsize, shnum, shstrndx = _unpack(e + "HHH", data, 0x2E)
        header = e + "IIIIII"
    else:
        raise UnrecognizedExecutableError()

    sections = [
        _unpack(header, data, shoff + index * shentsize) for index in range(shnum)
    ]
    if shstrndx >= len(sections):
        return None
    strtab = sections[shstrndx]
    names = _slice(data, strtab[4], strtab[5])
    for name_off, _type, _flags, _addr, offset, size in sections:
        end = names.find(b"\0", name_off)
        if names[name_off : end if end >= 0 else None] == _SECTION:
            return _slice(data, offset, size)
    return None


def _pe_section(data: bytes) -> bytes | None:
    (pe_off,) = _unpack("<I", data, 0x3C)
    if data[pe_off : pe_off + 4] != b"PE\0\0":
        raise UnrecognizedExecutableError()
    _machine, nsections, _ts, _sym, _nsym, opt_size, _ch = _unpack(
        "<HHIIIHH", data, pe_off + 4
    )
    table = pe_off + 24 + opt_size
    for index in range(nsections):
        name, vsize, _vaddr, raw_size, raw_ptr = _unpack(
            "<8sIIII", data, table + index * 40
        )
        if name.rstrip(b"\0") == _SECTION:
            size = min(vsize, raw_size) if vsize else raw_size
            return _slice(data, raw_ptr, size)
    return None


def _macho_section(data: bytes, e: str, is64: bool) -> bytes | None:
    ncmds, _sizeofcmds = _unpack(e + "II", data, 16)
    offset = 32 if is64 else 28
    for _ in range(ncmds):
        cmd, cmdsize = _unpack(e + "II", data, offset)
        if is64 and cmd == 0x19:
            nsects = _unpack(e + "I", data, offset + 64)[0]
            sect, sect_size, fmt = offset + 72, 80, e + "16s16sQQI"
        elif not is64 and cmd == 0x1:
            nsects = _unpack(e + "I", data, offset + 48)[0]
            sect, sect_size, fmt = offset + 56, 68, e + "16s16sIII"
        else:
            nsects = 0
            sect = sect_size = 0
            fmt = ""
        for index in range(nsects):
            name, _seg, _addr, size, file_off = _unpack(
                fmt, data, sect + index * sect_size
            )
            if name.rstrip(b"\0") == _SECTION:
                return _slice(data, file_off, size)
        if cmdsize <= 0:
            break
        offset += cmdsize
    return None


def _find_section(data: bytes) -> bytes | None:
    if data[:4] == b"\x7fELF":
        return _elf_section(data)
    if data[:2] == b"MZ":
        return _pe_section(data)
    magic = data[:4]
    if magic == b"\xcf\xfa\xed\xfe":
        return _macho_section(data, "<", True)
    if magic == b"\xce\xfa\xed\xfe":
        return _macho_section(data, "<", False)
    if magic == b"\xfe\xed\xfa\xcf":
        return _macho_section(data, ">", True)
    if magic == b"\xfe\xed\xfa\xce":
        return _macho_section(data, ">", False)
    raise UnrecognizedExecutableError()


def read_dependency_info(data: bytes) -> dict[str, Any]:
    """Extract and decode the cargo-auditable JSON embedded in an executable."""
    section = _find_section(bytes(data))
    if section is None:
        raise NonRustBinaryError()
    try:
        decompressor = zlib.decompressobj()
        raw = decompressor.decompress(section)
        info = json.loads(raw)
    except (zlib.error, ValueError) as exc:
        raise ParseError(f"invalid dependency data: {exc}") from exc
    if not isinstance(info, dict) or not isinstance(info.get("packages", []), list):
        raise ParseError("invalid dependency data: missing package list")
    return info


def _is_runtime(pkg: dict[str, Any]) -> bool:
    return pkg.get("kind", "runtime") != "build"


class RustBinaryParser(Parser):
    """Reports the runtime crates recorded in an auditable Rust binary."""

    def parse(self, stream: IO) -> tuple[list[Library], list[Dependency]]:
        data = stream.read()
        if isinstance(data, str):
            raise UnrecognizedExecutableError()
        packages = read_dependency_info(data).get("packages", [])

        libs: list[Library] = []
        deps: list[Dependency] = []
        for pkg in packages:
            if not _is_runtime(pkg):
                continue
            pkg_id = package_id(pkg["name"], pkg["version"])
            libs.append(
                Library(
                    id=pkg_id,
                    name=pkg["name"],
                    version=pkg["version"],
                    indirect=not pkg.get("root", False),
                )
            )
            children = [
                package_id(packages[i]["name"], packages[i]["version"])
                for i in pkg.get("dependencies", []) or []
                if _is_runtime(packages[i])
            ]
            if children:
                deps.append(Dependency(id=pkg_id, depends_on=children))
        return libs, deps