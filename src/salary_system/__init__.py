"""Salary System package.

This package is organized by feature modules (users, salaries) with a thin
Flask controller layer over service/repository layers.
"""
