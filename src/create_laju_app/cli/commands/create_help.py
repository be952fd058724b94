"""Shared help text for the create command."""

CREATE_COMMAND_DOC = """
Create a new Laju project from the official template.

Steps:
- Validate the project name and make sure the directory is free
- Download the template (no git history)
- Set the package name and reset the version to 0.0.1
- Install dependencies, copy .env.example to .env, run migrations
- Optionally upgrade the project to TailwindCSS 4

Missing values are prompted for in a terminal. Without a terminal the first
available package manager and TailwindCSS 3 are used.

Examples:
  create-laju-app my-app
  create-laju-app my-app --package-manager bun
  create-laju-app my-app -p yarn --tailwind v4

Environment:
  CREATE_LAJU_DEBUG=1            Show tracebacks on failure
  CREATE_LAJU_TEMPLATE_REPO      Template override (owner/repo[#ref])
  GH_TOKEN / GITHUB_TOKEN        Token for the template download
"""
