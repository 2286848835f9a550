import json

import pytest
import requests

BOOT_URL = "https://boot.test/releases"
STARTER_URL = "https://starter.test"

BOOT_METADATA = {
    "_embedded": {
        "releases": [
            {"version": "3.1.2", "current": False, "status": "GENERAL_AVAILABILITY"},
            {"version": "3.2.0", "current": True, "status": "GENERAL_AVAILABILITY"},
        ]
    }
}

STARTER_METADATA = {
    "type": {
        "type": "action",
        "default": "maven-project",
        "values": [
            {"id": "maven-project", "name": "Maven Project", "action": "/project.zip"},
            {"id": "maven-build", "name": "Maven POM", "action": "/starter.zip", "tags": {"build": "maven", "format": "build"}},
        ],
    }
}

POM = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <modelVersion>4.0.0</modelVersion>
  <parent>
    <groupId>org.springframework.boot</groupId>
    <artifactId>spring-boot-starter-parent</artifactId>
    <version>3.2.0</version>
  </parent>
  <groupId>com.example</groupId>
  <artifactId>demo</artifactId>
  <version>0.0.1-SNAPSHOT</version>
  <properties>
    <spring-boot.version>3.2.0</spring-boot.version>
    <other.prop>x</other.prop>
    <spring-cloud.version>2023.0.0</spring-cloud.version>
  </properties>
  <dependencies>
    <dependency>
      <groupId>org.springframework.cloud</groupId>
      <artifactId>spring-cloud-starter</artifactId>
    </dependency>
  </dependencies>
</project>
"""


class FakeResponse:
    def __init__(self, content, status_code=200):
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.content = content
        self.status_code = status_code

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeServer:
    """Stands in for requests.get, answering from a url -> response table."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url, content, status_code=200):
        if not isinstance(content, (str, bytes)):
            content = json.dumps(content)
        self.routes[url] = FakeResponse(content, status_code)

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if url not in self.routes:
            raise requests.ConnectionError(f"no route to {url}")
        return self.routes[url]


@pytest.fixture
def server(monkeypatch):
    fake = FakeServer()
    monkeypatch.setattr("spring_version.requests.get", fake.get)
    return fake


@pytest.fixture
def spring_server(server):
    server.add(BOOT_URL, BOOT_METADATA)
    server.add(STARTER_URL, STARTER_METADATA)
    server.add(STARTER_URL + "/starter.zip", POM)
    return server
