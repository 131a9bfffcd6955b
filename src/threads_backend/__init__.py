"""Threads backend: users, communities and threaded posts over a relational store."""
