"""Verify that the setup is correct before browsing repositories."""
import asyncio
import os
import sys

from dotenv import load_dotenv

# Add the project root to sys.path so imports resolve without an install
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from repo_pager.domain.errors import FetchError
from repo_pager.infrastructure.github_rest_client import GitHubRestClient
from repo_pager.infrastructure.settings import load_settings

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')

PROBE_USER = os.getenv("PROBE_USER", "octocat")


def check_configuration():
    """Check that configuration values parse."""
    print("Checking configuration...")

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")
        return False

    print("✅ Configuration loaded")
    print(f"   GITHUB_API_URL: {settings.api_url}")
    print(f"   PAGE_SIZE: {settings.page_size}")
    print(f"   REQUEST_TIMEOUT: {settings.request_timeout}")
    return True


def check_github_token():
    """Check the optional GitHub token format."""
    print("\nChecking GitHub token...")

    token = os.getenv("GITHUB_TOKEN")
    if not token:
        print("⚠️  GITHUB_TOKEN not set, unauthenticated rate limits apply")
        return True

    if token.startswith("ghp_") or token.startswith("github_pat_"):
        print("✅ GitHub token format looks valid")
        print(f"   Token prefix: {token[:10]}...")
        return True
    else:
        print("⚠️  Token format may be invalid (expected ghp_* or github_pat_*)")
        return True  # Don't fail, might be old format


async def _probe_api(settings):
    client = GitHubRestClient.from_settings(settings)
    try:
        return await client.fetch_page(PROBE_USER, 1, page_size=1)
    finally:
        await client.close()


def check_api_access():
    """Fetch a single repository to confirm the API is reachable."""
    print("\nChecking GitHub API access...")

    try:
        page = asyncio.run(_probe_api(load_settings()))
    except (FetchError, ValueError) as e:
        print(f"❌ Failed to fetch repositories for {PROBE_USER}: {e}")
        return False

    print(f"✅ Fetched {len(page)} repository for {PROBE_USER}")
    print(f"   More pages advertised: {page.has_more}")
    return True


def main():
    """Run all verification checks."""
    print("=" * 60)
    print("repo-pager - Setup Verification")
    print("=" * 60)

    checks = [
        ("Configuration", check_configuration),
        ("GitHub Token", check_github_token),
        ("GitHub API Access", check_api_access),
    ]

    results = {}
    for name, check_func in checks:
        try:
            results[name] = check_func()
        except Exception as e:
            print(f"❌ {name} check failed with exception: {e}")
            results[name] = False

    print("\n" + "=" * 60)
    print("Verification Summary")
    print("=" * 60)

    for name, passed in results.items():
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"{status}: {name}")

    if all(results.values()):
        print("\n✅ All checks passed! Ready to browse repositories.")
        print("\nNext steps:")
        print("  python browse_repos.py octocat --max-pages 0")
        sys.exit(0)
    else:
        print("\n❌ Some checks failed. Please fix the issues above.")
        print("\nCommon solutions:")
        print("  - Check network access to GITHUB_API_URL")
        print("  - Set GITHUB_TOKEN if you hit rate limits: export GITHUB_TOKEN=your_token")
        sys.exit(1)


if __name__ == "__main__":
    main()
