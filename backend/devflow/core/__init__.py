# devflow/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and store handle lifecycle
- errors: Error kinds raised by the services
- revalidation: Cache revalidation signal for the rendering layer
"""
