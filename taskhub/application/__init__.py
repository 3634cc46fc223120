"""Application layer for TaskHub.

Ports (protocols) describe the collaborators the core talks to;
services implement the business operations on top of them.
"""
