"""Adapters – SQLAlchemy and RabbitMQ implementations of the messaging ports.

Import the sub-package you need; each guards its optional dependency.
"""
