"""redemption_server — FastAPI REST API for the redemption wizard SDK.

Exposes the WizardController over HTTP: one session per page load,
events posted one at a time, the page view returned after each, and
the simulated payment observed by polling.  Sessions live in memory only.
"""
