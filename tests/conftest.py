"""Shared fixtures for scarab2pivotal tests."""

import logging
import tempfile
from pathlib import Path

import pytest

SAMPLE_EXPORT = """<?xml version="1.0" encoding="UTF-8"?>
<scarab-issues>
  <module><name>Web</name></module>
  <issues>
    <issue>
      <id>WEB1</id>
      <activity-sets>
        <activity-set>
          <created-date>
            <format>yyyy-MM-dd'T'HH:mm:ss z</format>
            <timestamp>2005-03-20T09:00:00 PST</timestamp>
          </created-date>
          <activities>
            <activity>
              <attribute><name>Status</name></attribute>
              <new-value>Deployed</new-value>
            </activity>
            <activity>
              <attribute><name>Summary</name></attribute>
              <new-value>Login &amp; logout</new-value>
            </activity>
          </activities>
        </activity-set>
        <activity-set>
          <created-date>
            <format>yyyy-MM-dd'T'HH:mm:ss z</format>
            <timestamp>2005-03-18T15:26:12 PST</timestamp>
          </created-date>
          <activities>
            <activity>
              <attribute><name>Status</name></attribute>
              <new-value>Submitted</new-value>
            </activity>
            <activity>
              <attribute><name>Summary</name></attribute>
              <new-value>Login</new-value>
            </activity>
            <activity>
              <attribute><name>Description</name></attribute>
              <new-value><![CDATA[He said &quot;hi&quot;]]></new-value>
            </activity>
            <activity>
              <attribute><name>Estimated effort</name></attribute>
              <new-value>0</new-value>
            </activity>
            <activity>
              <attribute><name>NULL</name></attribute>
              <new-value>ignored</new-value>
            </activity>
            <activity>
              <new-value>no attribute</new-value>
            </activity>
          </activities>
        </activity-set>
      </activity-sets>
    </issue>
    <issue>
      <id>WEB2</id>
      <activity-sets>
        <activity-set>
          <created-date>
            <timestamp>2005-04-01T10:00:00 PST</timestamp>
          </created-date>
          <activities>
            <activity>
              <attribute><name>Summary</name></attribute>
              <new-value>Search, with commas</new-value>
            </activity>
            <activity>
              <attribute><name>Status</name></attribute>
              <new-value>In Development</new-value>
            </activity>
            <activity>
              <attribute><name>Estimated effort</name></attribute>
              <new-value>9</new-value>
            </activity>
          </activities>
        </activity-set>
      </activity-sets>
    </issue>
    <issue>
      <id>WEB3</id>
    </issue>
  </issues>
</scarab-issues>
"""


@pytest.fixture
def sample_export():
    """Write the sample Scarab export to a temporary file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "export.xml"
        path.write_text(SAMPLE_EXPORT, encoding="utf-8")
        yield path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers installed by configure_logging during a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
