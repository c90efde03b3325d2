"""
FastAPI dependencies for the shared service objects
"""

from fastapi import Depends, Request

from theme_contributor.core.context import ThemeContributorContext
from theme_contributor.core.dynamic_include import DynamicIncludeRegistry
from theme_contributor.core.lifecycle import ContributorLifecycle
from theme_contributor.core.resource_registry import ResourceRegistry


def get_context(request: Request) -> ThemeContributorContext:
    return request.app.state.context


def get_registry(context: ThemeContributorContext = Depends(get_context)) -> ResourceRegistry:
    return context.registry


def get_lifecycle(context: ThemeContributorContext = Depends(get_context)) -> ContributorLifecycle:
    return context.lifecycle


def get_includes(context: ThemeContributorContext = Depends(get_context)) -> DynamicIncludeRegistry:
    return context.includes
