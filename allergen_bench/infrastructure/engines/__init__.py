"""Inference engine adapters"""
from .http_inference_engine import HttpInferenceEngine

__all__ = ["HttpInferenceEngine"]
