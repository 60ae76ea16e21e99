"""
Use cases for the portfolio CMS API.

Each service orchestrates repositories/adapters to implement the business
rules (admin login, blog and project CRUD, image attachments). Routers call
these services instead of touching storage directly.
"""
