"""Kubernetes integration: client wrapper, configuration, kubeconfig and models."""

from kubectl_lite.integrations.kubernetes.client import KubernetesClient
from kubectl_lite.integrations.kubernetes.config import GlobalOptions, KubectlConfig
from kubectl_lite.integrations.kubernetes.kubeconfig import Kubeconfig

__all__ = ["GlobalOptions", "Kubeconfig", "KubectlConfig", "KubernetesClient"]
