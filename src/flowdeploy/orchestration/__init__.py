"""
Orchestration layer for flowdeploy workflows.

Sits between the CLI (presentation) and the deployment layer.

Architecture:
- DeployOrchestrator: prerequisites, configuration, topology, launch, health
"""

from .deploy_orchestrator import DeployOrchestrator

__all__ = ["DeployOrchestrator"]
