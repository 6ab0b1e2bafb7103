import psutil


def list_children():
    """Live child processes of the interpreter, unreaped ones included"""
    children = []
    for proc in psutil.Process().children():
        try:
            with proc.oneshot():
                children.append({
                    'pid': proc.pid,
                    'name': proc.name(),
                    'status': proc.status(),
                    'cmdline': ' '.join(proc.cmdline()),
                })
        except psutil.ZombieProcess:
            children.append({'pid': proc.pid, 'name': '?', 'status': psutil.STATUS_ZOMBIE, 'cmdline': ''})
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    return sorted(children, key=lambda x: x['pid'])


def show_children():
    children = list_children()
    if not children:
        print("No child processes.")
        return

    print(f"{'PID':<8} {'Name':<20} {'Status':<10} {'Command'}")
    print("=" * 60)
    for c in children:
        print(f"{c['pid']:<8} {c['name'][:19]:<20} {c['status']:<10} {c['cmdline']}")
