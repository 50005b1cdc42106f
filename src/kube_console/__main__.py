from kube_console.adapters.textual.app import main

main()
