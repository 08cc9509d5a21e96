"""
Use cases for the portfolio site.

The collection store owns reading and writing the persisted document; the
other modules prepare data for the pages (embeds, dates, uploads). Routers
call these services instead of touching storage directly.
"""
