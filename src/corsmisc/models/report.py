# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-target probe result."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Result:
    """
    Reflected origins for one target.

    `acao` holds every candidate whose request came back with a byte-identical
    Access-Control-Allow-Origin, in evaluation order. `acac` is the
    Access-Control-Allow-Credentials value of the response behind the most recent hit.
    """

    url: str
    acao: tuple[str, ...] = field(default_factory=tuple)
    acac: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "acao", tuple(self.acao))

    @property
    def exploitable(self) -> bool:
        """Reflection combined with credentials: the pattern an attacker can actually use."""
        return bool(self.acao) and self.acac == "true"

    def to_dict(self) -> dict[str, Any]:
        """Serialized body of a result; absent ACAC and an empty origin list are omitted."""
        data: dict[str, Any] = {}
        if self.acao:
            data["acao"] = list(self.acao)
        if self.acac is not None:
            data["acac"] = self.acac
        return data

    @classmethod
    def from_dict(cls, url: str, data: Mapping[str, Any] | None) -> Result:
        payload = data or {}
        acao = payload.get("acao") or []
        if isinstance(acao, str):
            acao = [acao]
        acac = payload.get("acac")
        return cls(
            url=str(url),
            acao=tuple(str(origin) for origin in acao),
            acac=None if acac is None else str(acac),
        )
