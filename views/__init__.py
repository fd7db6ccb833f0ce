"""View modules for manual routing.

This project uses a custom router in `app.py` instead of Streamlit's automatic
multi-page system. All page implementations live under `views/` and expose a
`view()` function; public pages are reached through query parameters
(`?verify=<id>`, `?page=register`).

Add any new page as a module with a `view()` callable and register it in
`PAGE_REGISTRY` inside `app.py`.
"""
