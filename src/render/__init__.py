"""Render module for calculator output display."""

from render.renderers import (
    BaseRenderer,
    SipRenderer,
    EmiRenderer,
    TaxDetailsRenderer,
    RetirementRenderer,
    RENDERER_REGISTRY,
    format_inr,
    format_lakhs,
    format_percent,
)

__all__ = [
    'BaseRenderer',
    'SipRenderer',
    'EmiRenderer',
    'TaxDetailsRenderer',
    'RetirementRenderer',
    'RENDERER_REGISTRY',
    'format_inr',
    'format_lakhs',
    'format_percent',
]
