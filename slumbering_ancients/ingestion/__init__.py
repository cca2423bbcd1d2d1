"""
Wiki ingestion from Google Drive.

- drive_client: paced Drive v3 client
- markdown: title extraction, cleaning and hashing of markdown pages
- wiki_scraper: synchronisation of Drive pages into ``wiki_content``
"""
