"""Bundled architecture blueprint of the ApiHub Core plugin runtime."""
from blueprint_types.types import Node

PROTOCOL_MD = """# ApiHub ABI protocol

Guest-owned memory model: the plugin (guest) allocates every buffer that
crosses the boundary, the host only reads and writes through exported calls.

1. Host calls `malloc(size)` exported by the guest and receives `ptr`.
2. Host writes the request bytes at `ptr`.
3. Host calls `handle(ptr, size)`.
4. Guest returns a packed u64: high 32 bits pointer, low 32 bits length.
5. Host copies the response out and calls `free(ptr)` for both buffers.
"""

GO_MOD = """module apihub-core

go 1.22

require github.com/tetratelabs/wazero v1.7.0
"""

SDK_MEMORY_GO = """package memory

import "unsafe"

// Keeps allocated slices reachable while the host uses them.
var buffers = make(map[uintptr][]byte)

//export malloc
func Malloc(size uint32) uintptr {
	buf := make([]byte, size)
	ptr := uintptr(unsafe.Pointer(&buf[0]))
	buffers[ptr] = buf
	return ptr
}

//export free
func Free(ptr uintptr) {
	delete(buffers, ptr)
}

func GetBytes(ptr uintptr, size uint32) []byte {
	return buffers[ptr]
}
"""

SDK_ADAPTER_GO = """package adapter

import (
	"apihub-core/sdk/api"
	"apihub-core/sdk/internal/memory"
)

//export handle
func Handle(ptr uint32, size uint32) uint64 {
	input := string(memory.GetBytes(uintptr(ptr), size))

	handler := api.GetHandler()
	if handler == nil {
		return pack(0, 0)
	}

	output, err := handler(input)
	if err != nil {
		output = "error: " + err.Error()
	}

	out := []byte(output)
	outPtr := memory.Malloc(uint32(len(out)))
	copy(memory.GetBytes(outPtr, uint32(len(out))), out)
	return pack(uint32(outPtr), uint32(len(out)))
}

func pack(ptr uint32, length uint32) uint64 {
	return (uint64(ptr) << 32) | uint64(length)
}
"""

SDK_API_GO = """package api

var globalHandler func(string) (string, error)

// RegisterHandler is the entry point for plugin developers.
func RegisterHandler(fn func(string) (string, error)) {
	globalHandler = fn
}

func GetHandler() func(string) (string, error) {
	return globalHandler
}
"""

CLI_MAIN_GO = """package main

import (
	"fmt"
	"os"
)

func main() {
	if len(os.Args) < 2 {
		fmt.Println("Usage: apihub-cli <command> [args]")
		os.Exit(1)
	}

	switch os.Args[1] {
	case "init":
		runInit()
	case "build":
		runBuild()
	default:
		fmt.Printf("Unknown command: %s\\n", os.Args[1])
		os.Exit(1)
	}
}
"""

CLI_BUILD_GO = """package main

import (
	"fmt"
	"os"
	"os/exec"
)

func runBuild() {
	args := []string{"build", "-o", "plugin.wasm", "-target=wasi", "-scheduler=none", "-no-debug", "."}

	fmt.Println("Building plugin with TinyGo...")
	cmd := exec.Command("tinygo", args...)
	cmd.Stdout = os.Stdout
	cmd.Stderr = os.Stderr

	if err := cmd.Run(); err != nil {
		fmt.Printf("Build failed: %v\\n", err)
		os.Exit(1)
	}
	fmt.Println("Success! Generated plugin.wasm")
}
"""

HOST_RUNTIME_GO = """package kernel

import (
	"context"

	"github.com/tetratelabs/wazero"
	"github.com/tetratelabs/wazero/imports/wasi_snapshot_preview1"
)

type Runtime struct {
	ctx     context.Context
	runtime wazero.Runtime
}

func NewRuntime(ctx context.Context) *Runtime {
	r := wazero.NewRuntime(ctx)
	wasi_snapshot_preview1.MustInstantiate(ctx, r)
	return &Runtime{ctx: ctx, runtime: r}
}

func (r *Runtime) Close() error {
	return r.runtime.Close(r.ctx)
}
"""

HOST_INVOKER_GO = """package kernel

import (
	"context"
	"fmt"

	"github.com/tetratelabs/wazero/api"
)

// Invoke runs one request through the guest-owned memory protocol.
func Invoke(ctx context.Context, mod api.Module, input []byte) ([]byte, error) {
	malloc := mod.ExportedFunction("malloc")
	free := mod.ExportedFunction("free")
	handle := mod.ExportedFunction("handle")

	res, err := malloc.Call(ctx, uint64(len(input)))
	if err != nil {
		return nil, err
	}
	ptr := res[0]
	defer free.Call(ctx, ptr)

	if !mod.Memory().Write(uint32(ptr), input) {
		return nil, fmt.Errorf("write out of range")
	}

	packed, err := handle.Call(ctx, ptr, uint64(len(input)))
	if err != nil {
		return nil, err
	}
	outPtr, outLen := uint32(packed[0]>>32), uint32(packed[0])
	defer free.Call(ctx, uint64(outPtr))

	out, ok := mod.Memory().Read(outPtr, outLen)
	if !ok {
		return nil, fmt.Errorf("read out of range")
	}
	return append([]byte(nil), out...), nil
}
"""

HOST_LOADER_GO = """package kernel

import (
	"os"
	"sync"

	"github.com/tetratelabs/wazero"
)

type Manager struct {
	mu       sync.RWMutex
	runtime  *Runtime
	compiled map[string]wazero.CompiledModule
}

func (m *Manager) Load(name, path string) error {
	wasm, err := os.ReadFile(path)
	if err != nil {
		return err
	}
	mod, err := m.runtime.runtime.CompileModule(m.runtime.ctx, wasm)
	if err != nil {
		return err
	}
	m.mu.Lock()
	defer m.mu.Unlock()
	m.compiled[name] = mod
	return nil
}
"""

EXAMPLE_PLUGIN_GO = """package main

import (
	"strings"

	"apihub-core/sdk/api"
	_ "apihub-core/sdk/internal/adapter"
)

func init() {
	api.RegisterHandler(func(input string) (string, error) {
		return "Hello, " + strings.TrimSpace(input) + "!", nil
	})
}

func main() {}
"""

PROJECT_FILES = [
    Node.directory("apihub-core", [
        Node.file("go.mod", GO_MOD, language="shell"),
        Node.directory("abi", [
            Node.file("protocol.md", PROTOCOL_MD, language="markdown"),
        ]),
        Node.directory("sdk", [
            Node.directory("internal", [
                Node.directory("memory", [
                    Node.file("memory.go", SDK_MEMORY_GO, language="go"),
                ]),
                Node.directory("adapter", [
                    Node.file("adapter.go", SDK_ADAPTER_GO, language="go"),
                ]),
            ]),
            Node.file("api.go", SDK_API_GO, language="go"),
        ]),
        Node.directory("cmd", [
            Node.directory("apihub-cli", [
                Node.file("main.go", CLI_MAIN_GO, language="go"),
                Node.file("build.go", CLI_BUILD_GO, language="go"),
                Node.file("init.go", "// Implements template generation...", language="go"),
            ]),
            Node.directory("apihub-host", [
                Node.directory("kernel", [
                    Node.file("runtime.go", HOST_RUNTIME_GO, language="go"),
                    Node.file("invoker.go", HOST_INVOKER_GO, language="go"),
                    Node.file("manager.go", HOST_LOADER_GO, language="go"),
                ]),
                Node.file("main.go", "// HTTP Server wrapping Runtime...", language="go"),
            ]),
        ]),
        Node.directory("examples", [
            Node.directory("hello-world", [
                Node.file("main.go", EXAMPLE_PLUGIN_GO, language="go"),
                Node.file("plugin.yaml", "name: hello-world\nversion: 0.1.0", language="yaml"),
            ]),
        ]),
    ]),
]


def bundled_forest():
    return list(PROJECT_FILES)


PROJECT_VERSION = "v0.1"
PROJECT_SUBTITLE = "Blueprint of the guest-owned memory model"
SIDEBAR_NOTES = (
    "Architecture: MVU",
    "Language: Go 1.22",
)
