"""Run pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AnalysisConfig:
    """Groups disassembly run configuration."""

    listing: bool = False
    stats: bool = False
    verbose: bool = False


@dataclass
class DisassemblyStats:
    """Timing and size statistics for each pipeline stage."""

    code_bytes: int = 0
    stringtab_bytes: int = 0
    global_area_size: int = 0
    public_symbols: int = 0

    # Stage timings (seconds)
    load_time: float = 0.0
    decode_time: float = 0.0
    aggregate_time: float = 0.0

    instructions_decoded: int = 0
    distinct_instructions: int = 0
    halted: bool = False

    @property
    def total_time(self) -> float:
        return self.load_time + self.decode_time + self.aggregate_time

    def report(self) -> str:
        lines = [
            "═══ Disassembly Statistics ═══",
            f"  File: {self.code_bytes} code bytes, {self.stringtab_bytes}-byte string table,"
            f" {self.public_symbols} public symbols, global area {self.global_area_size}",
            "",
            f"  {'Stage':<20} {'Time':>10}  {'Output':>30}",
            f"  {'─' * 20} {'─' * 10}  {'─' * 30}",
        ]
        stages = [
            ("Load", self.load_time, f"{self.code_bytes} code bytes"),
            (
                "Decode",
                self.decode_time,
                f"{self.instructions_decoded} instructions",
            ),
            (
                "Aggregate",
                self.aggregate_time,
                f"{self.distinct_instructions} distinct",
            ),
        ]
        for name, t, output in stages:
            time_str = f"{t * 1000:>8.1f}ms"
            lines.append(f"  {name:<20} {time_str:>10}  {output:>30}")

        lines.append(f"  {'─' * 20} {'─' * 10}  {'─' * 30}")
        lines.append(f"  {'Total':<20} {self.total_time * 1000:>8.1f}ms")
        lines.append("")
        lines.append(
            f"  Halt marker: {'reached' if self.halted else 'not reached (end of code)'}"
        )
        return "\n".join(lines)


@dataclass
class AnalysisResult:
    """Everything a run produces: the report, the optional listing and stats."""

    report: list[str] = field(default_factory=list)
    listing: list[str] = field(default_factory=list)
    stats: DisassemblyStats = field(default_factory=DisassemblyStats)
