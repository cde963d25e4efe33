#!/usr/bin/env python3
"""nginx-deploy: One-shot nginx provisioning for RPM-based servers."""

from nginx_deploy.cli import main

if __name__ == "__main__":
    main()
