"""
Built-in sample documents, one per format.

Used by the demos and tests to exercise every engine on realistic input:
an application config expressed in INI/TOML/YAML/JSON/plist, a small
inventory table in CSV, and a catalog in XML.
"""

from typing import Dict

from parselab.errors import Format

SAMPLE_JSON = """{
  "name": "ParseLab",
  "version": 3,
  "debug": false,
  "ratio": 0.75,
  "owner": null,
  "tags": ["viewer", "json", "tree"],
  "servers": [
    {"host": "alpha.example.com", "port": 8080},
    {"host": "beta.example.com", "port": 8081}
  ]
}
"""

SAMPLE_YAML = """name: ParseLab
version: 3
debug: false
tags:
  - viewer
  - yaml
servers:
  - host: alpha.example.com
    port: 8080
  - host: beta.example.com
    port: 8081
"""

SAMPLE_TOML = """# Application configuration
title = "ParseLab"
version = 3
ratio = 0.75
enabled = true
tags = ["viewer", "toml"]

[owner]
name = "Tom"
email = 'tom@example.com'

[[servers]]
host = "alpha.example.com"
port = 8080

[[servers]]
host = "beta.example.com"
port = 8081
"""

SAMPLE_INI = """; Application configuration
name = ParseLab

[display]
theme = dark
font_size = 14
line_numbers = yes

[network]
host = "example.com"
port: 8080
timeout = 2.5
"""

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<catalog region="eu">
  <book id="bk101">
    <title>XML Developer's Guide</title>
    <price currency="EUR">44.95</price>
  </book>
  <book id="bk102">
    <title>Midnight Rain</title>
    <price currency="EUR">5.95</price>
  </book>
  <publisher>Example Press</publisher>
</catalog>
"""

SAMPLE_CSV = '''sku,name,quantity,note
A-1,Widget,12,
B-2,"Gadget, large",3,"says ""hi"""
C-3,Doohickey,0,out of stock
'''

SAMPLE_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
  <key>name</key>
  <string>ParseLab</string>
  <key>version</key>
  <integer>3</integer>
  <key>debug</key>
  <false/>
  <key>tags</key>
  <array>
    <string>viewer</string>
    <string>plist</string>
  </array>
</dict>
</plist>
"""

SAMPLES: Dict[Format, str] = {
    Format.JSON: SAMPLE_JSON,
    Format.YAML: SAMPLE_YAML,
    Format.TOML: SAMPLE_TOML,
    Format.INI: SAMPLE_INI,
    Format.XML: SAMPLE_XML,
    Format.CSV: SAMPLE_CSV,
    Format.PLIST: SAMPLE_PLIST,
}


def sample_document(fmt: Format) -> str:
    """Return the built-in sample text for `fmt`."""
    return SAMPLES[fmt]
