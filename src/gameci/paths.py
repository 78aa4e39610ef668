"""Fixed paths inside the editor and report containers."""

PROJECT_PATH = "/src"
LIBRARY_CACHE_PATH = "/src/Library/"
BUILDS_DIR = "/builds"
RESULTS_DIR = "/results"

PERSONAL_LICENSE_PATH = "/root/.local/share/unity3d/Unity/Unity_lic.ulf"
SERVICES_CONFIG_PATH = "/usr/share/unity3d/config/services-config.json"
LICENSING_CLIENT = "/opt/unity/Editor/Data/Resources/Licensing/Client/Unity.Licensing.Client"

TRANSFORM_PATH = "/nunit-transforms/nunit3-junit.xslt"


def results_file(test_platform: str) -> str:
    return f"{RESULTS_DIR}/{test_platform}-results.xml"


def junit_results_file(test_platform: str) -> str:
    return f"{RESULTS_DIR}/{test_platform}-junit-results.xml"


def coverage_dir(test_platform: str) -> str:
    return f"{RESULTS_DIR}/{test_platform}-coverage/"


def coverage_history_dir(test_platform: str) -> str:
    return f"{RESULTS_DIR}/{test_platform}-coverage-history/"
