"""Render a Request as equivalent client code in other languages.

Every renderer is a plain string template over the request fields. Values
are interpolated as-is with no quoting or escaping, so a URL, header or body
containing the template's own quote character yields broken code; the output
is meant to be read and adjusted, not executed blindly.
"""
from enum import Enum
from typing import Callable, Dict, Optional

from .json_format import looks_like_json
from .models import Request

# methods with a dedicated helper in requests / reqwest
SHORTHAND_METHODS = {"GET": "get", "POST": "post", "PUT": "put", "DELETE": "delete"}


class Language(Enum):
    CURL = "curl"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    RUST = "rust"
    JAVA = "java"

    @property
    def title(self) -> str:
        return TITLES[self]

    @classmethod
    def from_choice(cls, choice: int) -> Optional["Language"]:
        """Menu number (1-based, in display order) to language."""
        members = list(cls)
        if 1 <= choice <= len(members):
            return members[choice - 1]
        return None


TITLES = {
    Language.CURL: "cURL",
    Language.JAVASCRIPT: "JavaScript (Fetch API)",
    Language.PYTHON: "Python (requests)",
    Language.RUST: "Rust (reqwest)",
    Language.JAVA: "Java (HttpClient)",
}


def banner(title: str) -> str:
    return f"=== {title} ==="


def render_curl(req: Request) -> str:
    parts = [f"curl -X {req.method} '{req.url}'"]
    for header in req.headers:
        parts.append(f"  -H '{header}'")
    if req.body:
        parts.append(f"  -d '{req.body}'")
    if req.follow_redirects:
        parts.append("  -L")
    if req.timeout > 0:
        parts.append(f"  --max-time {req.timeout}")
    return " \\\n".join(parts) + "\n"


def render_javascript(req: Request) -> str:
    lines = [f"fetch('{req.url}', {{", f"  method: '{req.method}',"]
    pairs = req.header_pairs()
    if pairs:
        entries = [f"    '{k}': '{v}'" for k, v in pairs]
        lines.append("  headers: {")
        lines.append(",\n".join(entries))
        lines.append("  },")
    if req.body:
        if looks_like_json(req.body):
            lines.append(f"  body: JSON.stringify({req.body})")
        else:
            lines.append(f"  body: '{req.body}'")
    lines += [
        "})",
        "  .then(response => response.json())",
        "  .then(data => console.log(data))",
        "  .catch(error => console.error('Error:', error));",
    ]
    return "\n".join(lines) + "\n"


def render_python(req: Request) -> str:
    lines = ["import requests", "import json", "", f"url = '{req.url}'"]
    pairs = req.header_pairs()
    if pairs:
        lines.append("headers = {")
        lines.append(",\n".join(f"    '{k}': '{v}'" for k, v in pairs))
        lines += ["}", ""]
    if req.body:
        lines += [f"data = '''{req.body}'''", ""]

    helper = SHORTHAND_METHODS.get(req.method)
    args = ["url"] if helper else [f"'{req.method}'", "url"]
    if pairs:
        args.append("headers=headers")
    if req.body:
        args.append("data=data")
    lines.append(f"response = requests.{helper or 'request'}({', '.join(args)})")
    lines.append("print(response.json())")
    return "\n".join(lines) + "\n"


def render_rust(req: Request) -> str:
    lines = [
        "use reqwest;",
        "",
        "#[tokio::main]",
        "async fn main() -> Result<(), Box<dyn std::error::Error>> {",
        "    let client = reqwest::Client::new();",
    ]
    if req.body:
        lines += [f'    let body = r#"{req.body}"#;', ""]

    helper = SHORTHAND_METHODS.get(req.method)
    if helper:
        lines.append(f'    let response = client.{helper}("{req.url}")')
    else:
        lines.append(
            f'    let response = client.request(reqwest::Method::from_bytes(b"{req.method}")?, "{req.url}")'
        )
    for k, v in req.header_pairs():
        lines.append(f'        .header("{k}", "{v}")')
    if req.body:
        lines.append("        .body(body)")
    lines += [
        "        .send()",
        "        .await?;",
        "",
        "    let body = response.text().await?;",
        '    println!("{}", body);',
        "    Ok(())",
        "}",
    ]
    return "\n".join(lines) + "\n"


def render_java(req: Request) -> str:
    lines = [
        "import java.net.URI;",
        "import java.net.http.HttpClient;",
        "import java.net.http.HttpRequest;",
        "import java.net.http.HttpResponse;",
        "",
        "public class HttpExample {",
        "    public static void main(String[] args) throws Exception {",
        "        HttpClient client = HttpClient.newHttpClient();",
    ]
    if req.body:
        lines += [
            '        String jsonBody = """',
            f"            {req.body}",
            '            """;',
            "",
        ]
    lines += [
        "        HttpRequest.Builder builder = HttpRequest.newBuilder()",
        f'            .uri(URI.create("{req.url}"))',
    ]
    for k, v in req.header_pairs():
        lines.append(f'            .header("{k}", "{v}")')
    publisher = "ofString(jsonBody)" if req.body else "noBody()"
    lines.append(f"            .{req.method}(HttpRequest.BodyPublishers.{publisher});")
    lines += [
        "",
        "        HttpRequest request = builder.build();",
        "        HttpResponse<String> response = client.send(request,",
        "            HttpResponse.BodyHandlers.ofString());",
        "        System.out.println(response.body());",
        "    }",
        "}",
    ]
    return "\n".join(lines) + "\n"


RENDERERS: Dict[Language, Callable[[Request], str]] = {
    Language.CURL: render_curl,
    Language.JAVASCRIPT: render_javascript,
    Language.PYTHON: render_python,
    Language.RUST: render_rust,
    Language.JAVA: render_java,
}


def render(req: Request, target: Language) -> str:
    return RENDERERS[target](req)


def render_section(req: Request, target: Language) -> str:
    return f"{banner(target.title)}\n{render(req, target)}"


def render_all(req: Request) -> str:
    return "\n".join(render_section(req, lang) for lang in Language)
