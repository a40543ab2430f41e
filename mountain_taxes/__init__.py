"""Mountain Taxes: compare state income tax burdens across income levels.

The package is split the same way the app is:

* ``calculators`` – the state tax table and the pure tax engine built on it.
* ``components`` – Plotly charts and Streamlit controls that consume the engine.

Only ``calculators`` is needed to compute taxes; ``components`` imports
Streamlit and Plotly.
"""

__version__ = "1.0.0"
