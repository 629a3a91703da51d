"""Prometheus metrics"""
