"""Complaint intake and triage for the hospital backend.

This package contains the keyword lexicons and text analyzer used to
classify incoming complaints, the routing and reply-template helpers,
the complaint models and the REST endpoints built on top of them.
"""
