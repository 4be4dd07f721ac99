"""Static extension to MIME type table.

Lookups are case-sensitive and use the extension with its leading dot,
exactly as returned by `os.path.splitext`. Unknown extensions resolve to
``application/octet-stream``.
"""

from os.path import splitext
from types import MappingProxyType

DEFAULT_MIME_TYPE = "application/octet-stream"

_TABLE = {
    # Text/document formats
    ".html": "text/html", ".htm": "text/html", ".shtml": "text/html", ".css": "text/css", ".xml": "text/xml",
    ".txt": "text/plain", ".md": "text/markdown", ".csv": "text/csv", ".yaml": "text/yaml", ".yml": "text/yaml",
    ".jad": "text/vnd.sun.j2me.app-descriptor", ".wml": "text/vnd.wap.wml", ".htc": "text/x-component",

    # Images
    ".gif": "image/gif", ".jpeg": "image/jpeg", ".jpg": "image/jpeg", ".png": "image/png",
    ".tif": "image/tiff", ".tiff": "image/tiff", ".wbmp": "image/vnd.wap.wbmp",
    ".ico": "image/x-icon", ".jng": "image/x-jng", ".bmp": "image/x-ms-bmp",
    ".svg": "image/svg+xml", ".svgz": "image/svg+xml", ".webp": "image/webp",
    ".avif": "image/avif", ".heic": "image/heic", ".heif": "image/heif", ".jxl": "image/jxl",

    # Web fonts
    ".woff": "application/font-woff", ".woff2": "font/woff2", ".ttf": "font/ttf", ".otf": "font/otf",
    ".eot": "application/vnd.ms-fontobject",

    # Archives and applications
    ".jar": "application/java-archive", ".war": "application/java-archive", ".ear": "application/java-archive",
    ".json": "application/json", ".hqx": "application/mac-binhex40", ".doc": "application/msword",
    ".pdf": "application/pdf", ".ps": "application/postscript", ".eps": "application/postscript",
    ".ai": "application/postscript", ".rtf": "application/rtf", ".m3u8": "application/vnd.apple.mpegurl",
    ".xls": "application/vnd.ms-excel", ".ppt": "application/vnd.ms-powerpoint", ".wmlc": "application/vnd.wap.wmlc",
    ".kml": "application/vnd.google-earth.kml+xml", ".kmz": "application/vnd.google-earth.kmz",
    ".7z": "application/x-7z-compressed", ".cco": "application/x-cocoa",
    ".jardiff": "application/x-java-archive-diff", ".jnlp": "application/x-java-jnlp-file",
    ".run": "application/x-makeself", ".pl": "application/x-perl", ".pm": "application/x-perl",
    ".prc": "application/x-pilot", ".pdb": "application/x-pilot", ".rar": "application/x-rar-compressed",
    ".rpm": "application/x-redhat-package-manager", ".sea": "application/x-sea",
    ".swf": "application/x-shockwave-flash", ".sit": "application/x-stuffit", ".tcl": "application/x-tcl",
    ".tk": "application/x-tcl", ".der": "application/x-x509-ca-cert", ".pem": "application/x-x509-ca-cert",
    ".crt": "application/x-x509-ca-cert", ".xpi": "application/x-xpinstall", ".xhtml": "application/xhtml+xml",
    ".xspf": "application/xspf+xml", ".zip": "application/zip",
    ".br": "application/x-brotli", ".gz": "application/gzip",
    ".bz2": "application/x-bzip2", ".xz": "application/x-xz",

    # Generic binaries
    ".bin": "application/octet-stream", ".exe": "application/octet-stream", ".dll": "application/octet-stream",
    ".deb": "application/octet-stream", ".dmg": "application/octet-stream", ".iso": "application/octet-stream",
    ".img": "application/octet-stream", ".msi": "application/octet-stream", ".msp": "application/octet-stream",
    ".msm": "application/octet-stream",

    # Office documents
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",

    # Audio
    ".mid": "audio/midi", ".midi": "audio/midi", ".kar": "audio/midi",
    ".mp3": "audio/mpeg", ".ogg": "audio/ogg", ".m4a": "audio/x-m4a",
    ".ra": "audio/x-realaudio", ".opus": "audio/opus", ".aac": "audio/aac",
    ".flac": "audio/flac",

    # Video
    ".3gpp": "video/3gpp", ".3gp": "video/3gpp", ".mp4": "video/mp4",
    ".mpeg": "video/mpeg", ".mpg": "video/mpeg", ".mov": "video/quicktime",
    ".webm": "video/webm", ".flv": "video/x-flv", ".m4v": "video/x-m4v",
    ".mng": "video/x-mng", ".asx": "video/x-ms-asf", ".asf": "video/x-ms-asf",
    ".wmv": "video/x-ms-wmv", ".avi": "video/x-msvideo",
    ".mkv": "video/x-matroska", ".ogv": "video/ogg",

    # Web development
    ".js": "application/javascript", ".wasm": "application/wasm",
    # .ts is also MPEG transport stream (video/mp2t); the script type wins
    ".ts": "application/typescript",
    ".atom": "application/atom+xml", ".rss": "application/rss+xml",
    ".mml": "text/mathml",
}

MIME_TYPES = MappingProxyType(_TABLE)


def resolve_mime_type(file_path: str) -> str:
    """Returns the MIME type for `file_path` based on its extension.

    Args:
        file_path (str): Path or file name, e.g. ``"docs/report.pdf"``.

    Returns:
        str: The mapped MIME type, or ``application/octet-stream`` when the
        extension is missing or unknown.

    Example:
        resolve_mime_type("logo.png")  # "image/png"
    """
    return MIME_TYPES.get(splitext(file_path)[1], DEFAULT_MIME_TYPE)
