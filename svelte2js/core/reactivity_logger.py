"""Reactivity logger for Svelte2JS compiler

Tracks the reactive decisions made while compiling a component:
which mutation sites were instrumented, which were left alone because
the variable never reaches the markup, and which text nodes received a
guarded update. The CLI prints the summary in verbose mode.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class DecisionKind(Enum):
    """Kinds of reactive decisions"""
    MUTATION_DETECTED = "mutation_detected"
    INSTRUMENTED = "instrumented"
    NOT_IN_TEMPLATE = "not_in_template"
    UPDATE_EMITTED = "update_emitted"


@dataclass
class DecisionRecord:
    """Record of a single reactive decision"""
    kind: DecisionKind
    symbol: Optional[str]
    reason: str
    line: Optional[int] = None


class ReactivityLogger:
    """Logs reactive decisions and provides summaries"""

    def __init__(self) -> None:
        self.records: List[DecisionRecord] = []

    def log(self,
            kind: DecisionKind,
            symbol: Optional[str],
            reason: str,
            line: Optional[int] = None) -> None:
        """Log a decision

        Args:
            kind: Kind of decision
            symbol: Variable the decision is about
            reason: Human readable explanation
            line: Script line number, when locations are tracked
        """
        self.records.append(DecisionRecord(kind=kind, symbol=symbol, reason=reason, line=line))

    def records_of(self, kind: DecisionKind) -> List[DecisionRecord]:
        """Get records of one kind in logging order"""
        return [record for record in self.records if record.kind == kind]

    def symbols_of(self, kind: DecisionKind) -> List[str]:
        """Get symbols of one kind in logging order"""
        return [record.symbol for record in self.records_of(kind) if record.symbol]

    def get_summary(self) -> Dict:
        """Get summary statistics

        Returns:
            Dictionary with decision counts
        """
        by_kind: Dict[DecisionKind, int] = {}
        for record in self.records:
            by_kind[record.kind] = by_kind.get(record.kind, 0) + 1

        return {
            "total_decisions": len(self.records),
            "decisions_by_kind": by_kind,
            "instrumented_symbols": sorted(set(self.symbols_of(DecisionKind.INSTRUMENTED))),
        }

    def print_summary(self) -> str:
        """Generate formatted summary string

        Returns:
            Formatted summary as string
        """
        summary = self.get_summary()
        lines = []

        lines.append("=== Reactivity Summary ===")
        lines.append(f"Total decisions: {summary['total_decisions']}")
        lines.append("")

        if summary['decisions_by_kind']:
            lines.append("Decisions by kind:")
            for kind, count in summary['decisions_by_kind'].items():
                lines.append(f"  {kind.value}: {count}")
            lines.append("")

        if summary['instrumented_symbols']:
            lines.append(f"Instrumented: {', '.join(summary['instrumented_symbols'])}")
            lines.append("")

        skipped = self.records_of(DecisionKind.NOT_IN_TEMPLATE)
        if skipped:
            lines.append("Not instrumented (top 10):")
            for record in skipped[:10]:
                where = f" (line {record.line})" if record.line else ""
                lines.append(f"  '{record.symbol}'{where}: {record.reason}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all logs"""
        self.records.clear()
