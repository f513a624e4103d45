#This file is for development purposes only

import logging
import sys

from github_client_impl import get_client
from tracker_client_interface import TrackerError


def main():
    logging.basicConfig(level=logging.DEBUG)
    repository = sys.argv[1] if len(sys.argv) > 1 else "octocat/Hello-World"
    print(f"Hello from github-issues-client! Using {repository}")

    with get_client(repository, interactive=True) as client:
        print("\nFetching open issues...")
        # list_issues follows every page, keep it small
        try:
            issues = client.list_issues({"state": "open", "per_page": 5, "page": 1}).result()
            for issue in issues:
                print(f"- #{issue['number']} {issue['title']}")
        except TrackerError as e:
            print(f"Error talking to GitHub: {e}")

        # Same outcome delivered through a callback
        def show(error, issue):
            if error is not None:
                print(f"Error talking to GitHub: {error}")
            else:
                print(f"- #{issue['number']} {issue['title']} ({issue['state']})")

        client.get_issue(1, show)


if __name__ == "__main__":
    main()
