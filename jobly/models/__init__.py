"""
Entity access layer.

- company: companies and their jobs
- job: job postings
- user: accounts and authentication
- application: user -> job applications
"""
