"""Raw token -> canonical registry id.

Keys are the spellings parsers emit: CSS property names, selector tokens
such as ``:has()``, at-rules with their ``@``, CSS functions as ``name()``,
HTML element and attribute names, script API names (bare or dotted), and the
synthetic syntax tokens (``optional-chaining`` ...).
"""
from __future__ import annotations
from typing import Dict

CSS_PROPERTY_IDS: Dict[str, str] = {
    # Container queries
    "container-type": "container-queries",
    "container-name": "container-queries",
    "container": "container-queries",
    # Grid
    "display": "css-grid",
    "grid-template-columns": "css-grid",
    "grid-template-rows": "css-grid",
    "grid-template-areas": "css-grid",
    "grid-column": "css-grid",
    "grid-row": "css-grid",
    "grid-area": "css-grid",
    "gap": "css-grid-gap",
    "grid-gap": "css-grid-gap",
    "column-gap": "css-grid-gap",
    "row-gap": "css-grid-gap",
    # Flexbox
    "flex": "flexbox",
    "flex-direction": "flexbox",
    "flex-wrap": "flexbox",
    "justify-content": "flexbox",
    "align-items": "flexbox",
    "align-content": "flexbox",
    "align-self": "flexbox",
    # Layout
    "aspect-ratio": "aspect-ratio",
    "object-fit": "object-fit",
    "object-position": "object-fit",
    "inset": "inset",
    "margin-block": "logical-properties",
    "margin-inline": "logical-properties",
    "padding-block": "logical-properties",
    "padding-inline": "logical-properties",
    # Visual effects
    "backdrop-filter": "backdrop-filter",
    "filter": "css-filters",
    "mix-blend-mode": "css-mixblendmode",
    "clip-path": "css-clip-path",
    "mask": "css-masks",
    # Colour
    "color-scheme": "color-scheme",
    "accent-color": "accent-color",
    # Scrolling
    "scroll-behavior": "scroll-behavior",
    "scroll-snap-type": "scroll-snap",
    "scroll-snap-align": "scroll-snap",
    "overscroll-behavior": "overscroll-behavior",
    "scrollbar-gutter": "scrollbar-gutter",
    # Interaction
    "touch-action": "touch-action",
    "user-select": "user-select",
    # Transforms and animation
    "transform": "transforms2d",
    "transform-origin": "transforms2d",
    "perspective": "transforms3d",
    "animation": "css-animation",
    "transition": "css-transitions",
    "will-change": "will-change",
    "contain": "css-containment",
    "content-visibility": "content-visibility",
    "text-wrap": "text-wrap-balance",
}

CSS_FUNCTION_IDS: Dict[str, str] = {
    "var()": "css-variables",
    "calc()": "calc",
    "clamp()": "css-math-functions",
    "min()": "css-math-functions",
    "max()": "css-math-functions",
    "minmax()": "css-grid",
}

CSS_SELECTOR_IDS: Dict[str, str] = {
    ":has()": "css-has",
    ":is()": "css-matches-pseudo",
    ":where()": "css-where-pseudo",
    ":focus-visible": "focus-visible",
    ":focus-within": "focus-within",
    ":user-invalid": "user-pseudos",
    ":user-valid": "user-pseudos",
    "::backdrop": "backdrop",
    "::placeholder": "placeholder",
    "::marker": "css-marker-pseudo",
    "::file-selector-button": "file-selector-button",
}

AT_RULE_IDS: Dict[str, str] = {
    "@supports": "css-featurequeries",
    "@container": "container-queries",
    "@media": "css-mediaqueries",
    "@import": "css-import",
    "@keyframes": "css-animation",
    "@font-face": "fontface",
    "@layer": "css-cascade-layers",
    "@property": "registered-custom-properties",
    "@scope": "scope",
}

SCRIPT_API_IDS: Dict[str, str] = {
    # Canvas
    "getContext": "canvas",
    "CanvasRenderingContext2D": "canvas",
    "WebGLRenderingContext": "webgl",
    "WebGL2RenderingContext": "webgl2",
    "OffscreenCanvas": "offscreen-canvas",
    "ImageBitmap": "createimagebitmap",
    "createImageBitmap": "createimagebitmap",
    "Path2D": "path2d",
    # WebRTC
    "RTCPeerConnection": "rtcpeerconnection",
    "RTCDataChannel": "rtcdatachannel",
    "getUserMedia": "getusermedia",
    "getDisplayMedia": "getdisplaymedia",
    "MediaStream": "mediastream",
    # WebAssembly
    "WebAssembly": "wasm",
    "WebAssembly.instantiate": "wasm",
    "WebAssembly.compile": "wasm",
    # Service workers
    "ServiceWorker": "serviceworkers",
    "navigator.serviceWorker": "serviceworkers",
    "Cache": "cache",
    "caches": "cache",
    "PushManager": "push-api",
    "Notification": "notifications",
    # DOM
    "querySelector": "queryselector",
    "querySelectorAll": "queryselector",
    "addEventListener": "addeventlistener",
    "CustomEvent": "customevent",
    "MutationObserver": "mutationobserver",
    "ResizeObserver": "resizeobserver",
    "IntersectionObserver": "intersectionobserver",
    "AbortController": "abortcontroller",
    "FormData": "formdata",
    "URLSearchParams": "urlsearchparams",
    "URL": "url",
    "document.startViewTransition": "view-transitions",
    # Fetch
    "fetch": "fetch",
    "Request": "fetch",
    "Response": "fetch",
    "Headers": "fetch",
    # Files
    "Blob": "fileapi",
    "File": "fileapi",
    "FileReader": "filereader",
    # Storage
    "localStorage": "localstorage",
    "sessionStorage": "sessionstorage",
    "indexedDB": "indexeddb",
    # Crypto
    "crypto": "cryptography",
    "crypto.getRandomValues": "getrandomvalues",
    "crypto.randomUUID": "crypto-randomuuid",
    "crypto.subtle": "subtlecrypto",
    # Performance
    "performance": "high-resolution-time",
    "performance.now": "high-resolution-time",
    "PerformanceObserver": "performance-observer",
    # Media
    "AudioContext": "audio-api",
    "MediaRecorder": "mediarecorder",
    "MediaSource": "mediasource",
    "HTMLMediaElement": "audio",
    # Language runtime APIs
    "structuredClone": "structured-clone",
    "WeakRef": "weakrefs",
    "FinalizationRegistry": "weakrefs",
    "AggregateError": "promise-any",
    "queueMicrotask": "queuemicrotask",
    # Syntax (emitted by parsers from node kinds)
    "optional-chaining": "optional-chaining",
    "nullish-coalescing": "nullish-coalescing",
    "private-fields": "private-class-fields",
    "private-methods": "private-class-methods",
    "top-level-await": "top-level-await",
    "dynamic-import": "es6-module-dynamic-import",
    "bigint": "bigint",
    "numeric-separators": "numeric-separators",
    # Intl
    "Intl.DateTimeFormat": "internationalization",
    "Intl.NumberFormat": "internationalization",
    "Intl.Collator": "internationalization",
    "Intl.PluralRules": "intl-pluralrules",
    "Intl.RelativeTimeFormat": "intl-relativetimeformat",
    "Intl.ListFormat": "intl-listformat",
    "Intl.Locale": "intl-locale",
    "Intl.Segmenter": "intl-segmenter",
    # Streams
    "ReadableStream": "streams",
    "WritableStream": "streams",
    "TransformStream": "streams",
    # Web components
    "customElements": "custom-elementsv1",
    "ShadowRoot": "shadowdomv1",
    "HTMLTemplateElement": "template",
    # Input
    "PointerEvent": "pointer",
    "setPointerCapture": "pointer",
    "TouchEvent": "touch",
    "navigator.getGamepads": "gamepad",
    "Gamepad": "gamepad",
    "navigator.clipboard": "async-clipboard",
    "navigator.share": "web-share",
    "navigator.geolocation": "geolocation",
    # Device
    "navigator.getBattery": "battery-status",
    "BatteryManager": "battery-status",
    "DeviceOrientationEvent": "deviceorientation",
    "DeviceMotionEvent": "devicemotion",
}

HTML_ELEMENT_IDS: Dict[str, str] = {
    "dialog": "dialog",
    "details": "details",
    "summary": "details",
    "main": "html5semantic",
    "article": "html5semantic",
    "section": "html5semantic",
    "nav": "html5semantic",
    "aside": "html5semantic",
    "header": "html5semantic",
    "footer": "html5semantic",
    "figure": "html5semantic",
    "figcaption": "html5semantic",
    "time": "html5semantic",
    "mark": "html5semantic",
    "progress": "progressmeter",
    "meter": "progressmeter",
    "canvas": "canvas",
    "video": "video",
    "audio": "audio",
    "source": "video",
    "track": "video-track",
    "picture": "picture",
    "datalist": "datalist",
    "output": "form-validation",
    "template": "template",
    "slot": "shadowdomv1",
    "search": "search",
}

HTML_ATTRIBUTE_IDS: Dict[str, str] = {
    "loading": "loading-lazy-attr",
    "decoding": "img-decode-async",
    "fetchpriority": "priority-hints",
    "enterkeyhint": "enterkeyhint",
    "inputmode": "input-inputmode",
    "autocomplete": "form-attribute-autocomplete",
    "crossorigin": "cors",
    "integrity": "subresource-integrity",
    "referrerpolicy": "referrer-policy",
    "popover": "popover",
    "popovertarget": "popover",
    "inert": "inert",
    "srcset": "srcset",
    "sizes": "srcset",
}

# Custom properties (``--brand``) resolve here by prefix.
CUSTOM_PROPERTY_PREFIX = "--"
CUSTOM_PROPERTY_ID = "css-variables"


def build_feature_id_map() -> Dict[str, str]:
    combined: Dict[str, str] = {}
    for table in (
        CSS_PROPERTY_IDS,
        CSS_FUNCTION_IDS,
        CSS_SELECTOR_IDS,
        SCRIPT_API_IDS,
        HTML_ELEMENT_IDS,
        HTML_ATTRIBUTE_IDS,
        AT_RULE_IDS,
    ):
        combined.update(table)
    return combined


FEATURE_ID_MAP: Dict[str, str] = build_feature_id_map()
