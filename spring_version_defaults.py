# Output destinations understood by the writer
OUTPUT_STDOUT = "stdout"
OUTPUT_GITHUB = "github"

# GitHub Actions exposes the step output file through this variable
GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"

# Public metadata services
DEFAULT_STARTER_URL = "https://start.spring.io"
DEFAULT_BOOT_URL = "https://api.spring.io/projects/spring-boot/releases"

# Type ID of the starter action that produces a pom.xml
DEFAULT_TYPE_ID = "maven-build"

# Only properties with this prefix are reported
PROPERTY_PREFIX = "spring"

DESCRIPTION = """This command gets the Spring version.

You can specify the '-b, --boot-version' flag to determine the Spring Boot version,
or you can leave it blank to use the current version.

  $ spring-version
  $ spring-version -b 3.1.2

You can also use the '-d, --dependency' flag multiple times to specify dependencies.
Alternatively, you can pass dependencies by separating them with commas, e.g. foo,bar.

  $ spring-version -d cloud-starter -d native
  $ spring-version -d cloud-starter,devtools -d native

You can use the '--starter-url' flag to define the URL of the starter metadata server,
and the '--boot-url' flag to define the URL of the Spring Boot metadata server.

  $ spring-version --starter-url https://mystarter.com:8080
"""
