"""Framework vocabulary that must never be reported as a platform feature."""
from __future__ import annotations

import re
from typing import FrozenSet, List, Pattern, Tuple

REACT_APIS: FrozenSet[str] = frozenset([
    # Hooks
    "useState", "useEffect", "useContext", "useReducer", "useCallback", "useMemo",
    "useRef", "useImperativeHandle", "useLayoutEffect", "useDebugValue",
    "useId", "useDeferredValue", "useTransition", "useSyncExternalStore",
    # Components and element helpers
    "React", "Component", "PureComponent", "Fragment", "StrictMode",
    "Suspense", "lazy", "memo", "forwardRef", "createContext", "createElement",
    "cloneElement", "isValidElement", "Children", "createRef",
    # React DOM
    "ReactDOM", "render", "hydrate", "unmountComponentAtNode", "findDOMNode",
    "createPortal", "flushSync",
    # JSX runtime
    "jsx", "jsxs", "_jsx", "_jsxs",
])

VUE_APIS: FrozenSet[str] = frozenset([
    # Composition API
    "ref", "reactive", "computed", "watch", "watchEffect", "onMounted", "onUnmounted",
    "onBeforeMount", "onBeforeUnmount", "onUpdated", "onBeforeUpdate",
    "onActivated", "onDeactivated", "onErrorCaptured", "provide", "inject",
    "getCurrentInstance", "nextTick", "defineComponent", "defineProps", "defineEmits",
    "defineExpose", "withDefaults", "toRef", "toRefs", "unref", "isRef",
    # Options API
    "Vue", "data", "props", "methods", "created", "mounted",
    "updated", "destroyed", "beforeCreate", "beforeMount", "beforeUpdate", "beforeDestroy",
    "activated", "deactivated", "errorCaptured", "mixins", "extends", "components",
    # Router and stores
    "useRouter", "useRoute", "$router", "$route", "router-link", "router-view",
    "useStore", "$store", "mapState", "mapGetters", "mapMutations", "mapActions",
])

SVELTE_APIS: FrozenSet[str] = frozenset([
    # Stores
    "writable", "readable", "derived", "get", "subscribe", "set", "update",
    # Lifecycle and context
    "onMount", "onDestroy", "beforeUpdate", "afterUpdate", "tick",
    "setContext", "getContext", "hasContext", "getAllContexts",
    "createEventDispatcher", "dispatch",
    # SvelteKit
    "page", "navigating", "updated", "goto", "prefetch", "prefetchRoutes",
    "invalidate", "invalidateAll", "preloadData", "preloadCode",
    # Directive names
    "bind", "on", "use", "transition", "in", "out", "animate",
])

VUE_DIRECTIVE_PREFIXES: Tuple[str, ...] = ("v-", ":", "@", "#")

SVELTE_DIRECTIVE_PREFIXES: Tuple[str, ...] = (
    "bind:", "on:", "use:", "transition:", "in:", "out:", "animate:", "class:", "style:", "let:",
)

_RAW_PATTERNS: List[str] = [
    # React
    r"^use[A-Z]",
    r"^React",
    r"^jsx",
    r"^_jsx",
    r"^Component$",
    r"^PureComponent$",
    r"^Fragment$",
    r"^createElement$",
    r"^cloneElement$",
    r"^ReactDOM",
    # Vue
    r"^ref$",
    r"^reactive$",
    r"^computed$",
    r"^watch$",
    r"^onMounted$",
    r"^onUnmounted$",
    r"^defineComponent$",
    r"^defineProps$",
    r"^defineEmits$",
    r"^nextTick$",
    r"^provide$",
    r"^inject$",
    r"^toRef$",
    r"^toRefs$",
    r"^unref$",
    r"^isRef$",
    # Svelte and SvelteKit
    r"^writable$",
    r"^readable$",
    r"^derived$",
    r"^onMount$",
    r"^onDestroy$",
    r"^beforeUpdate$",
    r"^afterUpdate$",
    r"^tick$",
    r"^setContext$",
    r"^getContext$",
    r"^createEventDispatcher$",
    r"^goto$",
    r"^page$",
    r"^navigating$",
    # Angular
    r"^ng[A-Z]",
    r"^Injectable$",
    r"^Directive$",
    r"^Pipe$",
    # Template directive syntax
    r"^v-",
    r"^bind:",
    r"^on:",
    r"^use:",
    r"^\*ng",
    r"^\[",
    r"^\(",
]

FRAMEWORK_PATTERNS: Tuple[Pattern[str], ...] = tuple(re.compile(p) for p in _RAW_PATTERNS)


def is_framework_name(name: str) -> bool:
    return any(p.search(name) for p in FRAMEWORK_PATTERNS)
