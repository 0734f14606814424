"""Analyzers for Svelte2JS compiler

This module contains the analysis passes run on a parsed component.

Modules:
- ScopeBuilder: Builds the parent-linked scope tree of the script
- ReactivityAnalyzer: Classifies declared, changing and template-used variables
"""

from svelte2js.analyzers.scope_builder import ScopeBuilder, build_scopes, pattern_names
from svelte2js.analyzers.reactivity import (
    AnalysisResult, ReactivityAnalyzer, analyze, mutation_target
)

__all__ = [
    'ScopeBuilder',
    'build_scopes',
    'pattern_names',
    'AnalysisResult',
    'ReactivityAnalyzer',
    'analyze',
    'mutation_target',
]
