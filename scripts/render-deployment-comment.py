#!/usr/bin/env python3

"""Render the Vercel deployment summary comment to a file without posting it."""

from lib.render_deployment_comment import main

if __name__ == "__main__":
    raise SystemExit(main())
