from __future__ import annotations
from typing import FrozenSet

# Dotted names are matched as written (``navigator.clipboard``), so entries
# here are either global identifiers or fully qualified member paths.
WEB_PLATFORM_APIS: FrozenSet[str] = frozenset([
    # Canvas
    "getContext", "CanvasRenderingContext2D", "WebGLRenderingContext", "WebGL2RenderingContext",
    "OffscreenCanvas", "ImageBitmap", "createImageBitmap", "Path2D",
    # WebRTC
    "RTCPeerConnection", "RTCDataChannel", "RTCSessionDescription", "RTCIceCandidate",
    "getUserMedia", "getDisplayMedia", "MediaStream", "MediaStreamTrack",
    "navigator.mediaDevices.getUserMedia", "navigator.mediaDevices.getDisplayMedia",
    # WebAssembly
    "WebAssembly", "WebAssembly.instantiate", "WebAssembly.compile", "WebAssembly.validate",
    "WebAssembly.instantiateStreaming",
    # Service workers and PWA
    "ServiceWorker", "navigator.serviceWorker", "Cache", "caches",
    "PushManager", "Notification",
    # DOM
    "querySelector", "querySelectorAll", "document.querySelector", "document.querySelectorAll",
    "addEventListener", "removeEventListener", "dispatchEvent", "CustomEvent",
    "MutationObserver", "ResizeObserver", "IntersectionObserver", "PerformanceObserver",
    "AbortController", "AbortSignal", "FormData", "URLSearchParams", "URL",
    "document.startViewTransition",
    # Fetch and files
    "fetch", "Request", "Response", "Headers", "Blob", "File", "FileReader",
    # Navigator and scheduling
    "navigator", "navigator.geolocation", "navigator.permissions", "navigator.clipboard",
    "navigator.share", "navigator.getGamepads", "navigator.getBattery",
    "requestAnimationFrame", "cancelAnimationFrame", "requestIdleCallback",
    "setTimeout", "setInterval", "clearTimeout", "clearInterval", "queueMicrotask",
    # Storage
    "localStorage", "sessionStorage", "indexedDB",
    # Crypto
    "crypto", "crypto.getRandomValues", "crypto.randomUUID", "crypto.subtle",
    # Performance
    "performance", "performance.now", "performance.mark", "performance.measure",
    # Audio and video
    "AudioContext", "MediaRecorder", "MediaSource", "SourceBuffer",
    "HTMLMediaElement", "HTMLAudioElement", "HTMLVideoElement",
    # Language runtime
    "structuredClone", "reportError", "WeakRef", "FinalizationRegistry", "AggregateError",
    # Intl
    "Intl", "Intl.DateTimeFormat", "Intl.NumberFormat", "Intl.Collator", "Intl.PluralRules",
    "Intl.RelativeTimeFormat", "Intl.ListFormat", "Intl.Locale", "Intl.Segmenter",
    # Streams
    "ReadableStream", "WritableStream", "TransformStream",
    # Web components
    "customElements", "customElements.define", "ShadowRoot", "HTMLTemplateElement",
    # Input and device
    "PointerEvent", "setPointerCapture", "TouchEvent", "Gamepad", "BatteryManager",
    "DeviceOrientationEvent", "DeviceMotionEvent",
])
