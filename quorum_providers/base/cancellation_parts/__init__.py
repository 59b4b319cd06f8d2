"""Concrete cancellation types re-exported by :mod:`quorum_providers.base.cancellation`."""
