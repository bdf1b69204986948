"""Business Admin package.

This package is organized by feature modules (employees, attendance, payments,
payroll, expenses) with a thin Flask controller layer and service/repository
layers underneath.
"""
